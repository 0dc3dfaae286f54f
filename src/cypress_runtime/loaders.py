"""Loader script generation — renders plugins.js and support.js.

Both scripts are pure functions of the ordered list of contributing suite
names. Lines appear in exactly the given order; nothing is sorted or
deduplicated.
"""

GENERATED_MARKER = (
    "// Automatically generated by cypress-runtime. "
    "Manual changes are lost on the next suite registration."
)


def generate_plugin_loader(names: list[str]) -> str:
    """Build plugins.js: one combined ``(on, config)`` hook calling every suite's plugin."""
    lines = [GENERATED_MARKER, "module.exports = (on, config) => {"]
    for name in names:
        lines.append(f"  require('./plugins/{name}/index.js')(on, config);")
    lines.append("};")
    return "\n".join(lines) + "\n"


def generate_support_loader(names: list[str]) -> str:
    """Build support.js: requires every suite's support entry for its side effects."""
    lines = [GENERATED_MARKER]
    for name in names:
        lines.append(f"require('./support/{name}/index.js');")
    return "\n".join(lines) + "\n"
