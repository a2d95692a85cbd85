from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class Options:
    """Current installer selections.

    Only the Installer setters write here, and only after validation.
    """

    disk: Optional[str] = None
    product: Optional[str] = None
    language: Optional[str] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {"disk": self.disk, "product": self.product, "language": self.language}
