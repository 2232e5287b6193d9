"""File discovery and reading for source images."""

import asyncio
from pathlib import Path
from typing import List, Union


def find_files(base_dir: Union[str, Path]) -> List[str]:
    """All files below `base_dir`, as sorted POSIX paths relative to it."""
    root = Path(base_dir)
    if not root.is_dir():
        return []
    return sorted(
        p.relative_to(root).as_posix()
        for p in root.rglob("*")
        if p.is_file()
    )


async def read_file(path: Union[str, Path]) -> bytes:
    return await asyncio.to_thread(Path(path).read_bytes)
