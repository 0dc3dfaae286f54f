"""Command-line entry point — builds or inspects the Cypress runtime workspace.

Handles two execution modes:
  1. `cypress-runtime list` — prints every configured suite with the
     capabilities found in its directory.
  2. Default / `cypress-runtime build [--install]` — resets the workspace,
     registers every configured suite in order and optionally runs
     `npm install` on the merged package.json.
"""

import logging
import subprocess
import sys


def _list_suites() -> int:
    """Print configured suites and their capabilities."""
    from .capabilities import probe_suite
    from .filesystem import Filesystem
    from .settings import load_settings

    settings = load_settings()
    fs = Filesystem()
    for suite in settings.suites:
        if not fs.exists(suite.path):
            print(f"{suite.name}: (missing) {suite.path}")
            continue
        labels = probe_suite(suite.path, fs).labels()
        print(f"{suite.name}: {', '.join(labels) or '-'}  {suite.path}")
    return 0


def _build(install: bool) -> int:
    """Rebuild the workspace from settings. Returns the process exit code."""
    from .npm import NpmProjectManager
    from .runtime import CypressRuntime
    from .settings import load_settings

    settings = load_settings()

    npm = NpmProjectManager(settings.workspace_dir, npm_command=settings.npm_command)
    runtime = CypressRuntime(settings.workspace_dir, npm)

    runtime.initiate(settings.options())
    npm.ensure_initiated()

    missing: list[str] = []
    for suite in settings.suites:
        if not runtime.add_suite(suite.name, suite.path):
            missing.append(suite.name)

    if install or settings.install:
        npm.install()

    print(f"Built {settings.workspace_dir} with {len(runtime.suites)} suite(s).")
    if missing:
        print(f"Error: suites not found: {', '.join(missing)}")
        return 1
    return 0


def main() -> None:
    """Main entry point."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )

    args = sys.argv[1:]
    command = args[0] if args and not args[0].startswith("-") else "build"

    try:
        if command == "list":
            code = _list_suites()
        elif command == "build":
            code = _build(install="--install" in args)
        else:
            print(f"Unknown command: {command}")
            print("Usage: cypress-runtime [build [--install] | list]")
            code = 2
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}\n")
        print("Check your cypress-runtime.toml configuration.")
        code = 1
    except (RuntimeError, subprocess.CalledProcessError) as e:
        print(f"Error: npm install failed: {e}")
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
