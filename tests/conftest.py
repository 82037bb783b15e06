import pytest
import sys
from pathlib import Path
from typing import List, Optional

# Add src to sys.path so we can import freeout
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from freeout.core.models import Block, BlockRange, Blocks, Position  # noqa: E402
from freeout.readers.base import HeadingEvent, Reader  # noqa: E402


class EventReader(Reader):
    """Reader that replays a fixed list of events."""

    name = "events"

    def __init__(self, events):
        self.events = list(events)

    def read(self, source, config):
        yield from self.events


def line_range(source: str, line: int) -> BlockRange:
    """Byte range of a whole line of ``source`` (newline excluded)."""
    data = source.encode("utf-8")
    lines = data.split(b"\n")
    start = sum(len(chunk) + 1 for chunk in lines[:line])
    end = start + len(lines[line])
    return BlockRange(
        start=Position(line=line, column=0, offset=start),
        end=Position(line=line, column=end - start, offset=end),
    )


def heading_events(source: str, depths: List[int]) -> List[HeadingEvent]:
    """One heading per line of ``source`` with the given depths."""
    return [
        HeadingEvent(
            depth=depth,
            marker="#" * depth,
            title=f"Title {line}",
            header_range=line_range(source, line),
        )
        for line, depth in enumerate(depths)
    ]


def make_blocks(depths: List[int], parents: List[Optional[int]]) -> Blocks:
    """Arena with ids 1..N, given depths and parent ids."""
    blocks: Blocks = {}
    for index, (depth, parent_id) in enumerate(zip(depths, parents), start=1):
        blocks[index] = Block(id=index, depth=depth, title=f"Block {index}", parent_id=parent_id)
        if parent_id is not None:
            blocks[parent_id].children_ids.append(index)
    return blocks


# Common test fixtures
@pytest.fixture
def sample_markdown() -> str:
    """Small document with nesting, prose and a skipped level."""
    return (
        "# Introduction\n"
        "Opening words here.\n"
        "\n"
        "## Background\n"
        "Some history.\n"
        "\n"
        "#### Detail\n"
        "Deep note.\n"
        "\n"
        "# Method\n"
        "Steps to follow.\n"
    )
