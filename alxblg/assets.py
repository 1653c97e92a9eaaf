"""Static asset copying for alxblg.

Files under the blog's ``assets/`` directory are mirrored into
``<output>/assets/`` unchanged, keeping their relative layout and overwriting
whatever is already there. There is no bundling or minification step.

Key class:
- AssetCopier: Copies the asset tree into the output directory.
"""

from __future__ import annotations

import shutil
from pathlib import Path


class AssetCopier:
    """Mirrors a source asset tree into the output directory.

    Attributes:
        assets_dir (Path): Directory containing source assets.
        output_dir (Path): Site output directory; assets land in its assets/ folder.
    """

    def __init__(self, source_dir: Path, output_dir: Path):
        """Initialize the asset copier.

        Args:
            source_dir: Root directory of the blog project.
            output_dir: Directory where the site is built.
        """
        self.assets_dir = source_dir / "assets"
        self.output_dir = output_dir

    def run(self) -> list[Path]:
        """Copy every asset file.

        Returns:
            Destination paths of the copied files, or an empty list when the
            project has no assets directory.
        """
        if not self.assets_dir.is_dir():
            return []

        target = self.output_dir / "assets"
        target.mkdir(parents=True, exist_ok=True)

        copied: list[Path] = []
        for item in sorted(self.assets_dir.rglob("*")):
            rel = item.relative_to(self.assets_dir)
            dest = target / rel
            if item.is_dir():
                dest.mkdir(parents=True, exist_ok=True)
                continue
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, dest)
            copied.append(dest)
        return copied
