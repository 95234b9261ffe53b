from dataclasses import dataclass, field

from logger_helper import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RowDiff:
    """Structural changes between two visible row sequences.

    Apply every deletion (positions in the old sequence) before any
    insertion (positions in the new sequence).
    """

    deletions: list[int] = field(default_factory=list)
    insertions: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.deletions and not self.insertions

    def reload_positions(self, new_rows) -> list[int]:
        # rows that survived may sit at new slots; the consumer reloads them in place
        inserted = set(self.insertions)
        return [pos for pos in range(len(new_rows)) if pos not in inserted]


def diff_rows(old_rows, new_rows) -> RowDiff:
    old_rows = list(old_rows)
    new_rows = list(new_rows)
    old_keys = set(old_rows)
    new_keys = set(new_rows)
    deletions = [idx for idx, row in enumerate(old_rows) if row not in new_keys]
    insertions = [idx for idx, row in enumerate(new_rows) if row not in old_keys]
    logger.debug(
        "Diff %d -> %d rows: %d deletions, %d insertions",
        len(old_rows),
        len(new_rows),
        len(deletions),
        len(insertions),
    )
    return RowDiff(deletions, insertions)
