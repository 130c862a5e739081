"""Placeholder test scaffold."""

from fusion_export.models.project import GeneratedApp

TEST_SCAFFOLD_PATH = "tests/example.test.ts"


def generate_test_scaffold(app: GeneratedApp) -> str:
    """One placeholder test per app; real coverage is left to the developer."""
    lines = [
        f"describe({_quote(app.name)}, () => {{",
        "  it('should work', () => {",
        "    expect(true).toBe(true);",
        "  });",
    ]
    lines += [f"  it.todo({_quote(feature)});" for feature in app.features]
    lines.append("});")
    return "\n".join(lines) + "\n"


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"
