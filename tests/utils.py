"""Test utilities here."""
import os
import pathlib
from typing import Any, Dict, Union


class TmpDir(type(pathlib.Path())):  # type: ignore[misc]
    """Path with helpers to generate and inspect a directory tree."""

    def gen(
        self, struct: Union[str, Dict[str, Any]], text: Union[str, bytes] = ""
    ) -> None:
        """Creates files and directories from the given structure.

        Dicts are turned into directories, everything else into files.
        """
        if isinstance(struct, (str, bytes, os.PathLike)):
            struct = {os.fsdecode(struct): text}

        for name, contents in struct.items():
            path = self / name
            if isinstance(contents, dict):
                path.mkdir(parents=True, exist_ok=True)
                TmpDir(path).gen(contents)
                continue

            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(contents, bytes):
                path.write_bytes(contents)
            else:
                path.write_text(contents, encoding="utf-8")

    def cat(self) -> Dict[str, Any]:
        """Returns the directory tree with the contents of the files."""
        tree: Dict[str, Any] = {}
        for path in sorted(self.iterdir()):
            if path.is_dir():
                tree[path.name] = TmpDir(path).cat()
            else:
                tree[path.name] = path.read_text(encoding="utf-8")
        return tree
