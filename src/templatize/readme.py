"""README synthesized into the root of a freshly built template."""

from typing import Iterable, Mapping


def render_readme(project_name: str, scripts: Mapping[str, str], structure: Iterable[str]) -> str:
    """Render the template README.

    Args:
        project_name: Placeholder name of the templated project.
        scripts: The ``scripts`` table of the template's manifest, in manifest order.
        structure: Lines of the template's directory tree.

    Returns:
        The README as Markdown text ending with a newline.

    Example:
        >>> text = render_readme("my-preact-app", {"dev": "vite"}, ["template/", "└── src/"])
        >>> text.splitlines()[0]
        '# my-preact-app'
        >>> "- `npm run dev` - vite" in text
        True
    """
    lines = [
        f"# {project_name}",
        "",
        "Project generated from a template.",
        "",
        "## Quick Start",
        "",
        "```bash",
        "npm install",
        "npm run dev",
        "```",
    ]

    if scripts:
        lines += ["", "## Available Scripts", ""]
        lines += [f"- `npm run {name}` - {command}" for name, command in scripts.items()]

    tree = list(structure)
    if tree:
        lines += ["", "## Project Structure", "", "```"]
        lines += tree
        lines += ["```"]

    return "\n".join(lines) + "\n"
