"""Runtime options — produces the cypress.json written to the workspace root."""

from __future__ import annotations

import json
from typing import Any

DEFAULT_BASE_URL = "http://localhost:8888"


class CypressOptions:
    """Cypress configuration bound to the generated workspace layout.

    The folder/file keys point the runner at the tree built by CypressRuntime;
    ``extra`` keys are merged last and may override any default.
    """

    def __init__(
        self, base_url: str = DEFAULT_BASE_URL, extra: dict[str, Any] | None = None
    ) -> None:
        self.base_url = base_url
        self.extra = dict(extra or {})

    def to_dict(self) -> dict[str, Any]:
        config: dict[str, Any] = {
            "baseUrl": self.base_url,
            "integrationFolder": "integration",
            "pluginsFile": "plugins.js",
            "supportFile": "support.js",
            "fixturesFolder": False,
            "video": False,
        }
        config.update(self.extra)
        return config

    def get_cypress_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2) + "\n"
