"""cypress-runtime - collects independent Cypress test suites into one runtime workspace.

Each suite may contribute specs, shared step definitions, support code,
plugin code and npm dependencies. CypressRuntime links and copies them into
a single directory and regenerates the plugins.js/support.js entry points
the runner loads at startup.

Package entry point. Exports the version string only; the CLI lives in
main.py.
"""

__version__ = "0.1.0"
