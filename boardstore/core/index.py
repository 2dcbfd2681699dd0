"""Helpers over the in-memory board list.

The list is a sequence of tagged entries: ``BoardEntry`` (type "board") or
``BoardFolder`` (type "folder"). Everything here switches on that tag.
"""

from typing import Iterator, List, Optional, Sequence

from boardstore.schemas.board import Board, BoardListItem, BoardsIndex


def iter_boards(items: Sequence[BoardListItem]) -> Iterator[Board]:
    """Yield every reachable board in list order, folder members in place."""
    for item in items:
        if item.type == "board":
            yield item
        else:
            yield from item.items


def board_exists(items: Sequence[BoardListItem], board_id: str) -> bool:
    return any(board.id == board_id for board in iter_boards(items))


def first_board_id(items: Sequence[BoardListItem]) -> Optional[str]:
    for board in iter_boards(items):
        return board.id
    return None


def resolve_active_board_id(
    items: Sequence[BoardListItem], active_board_id: Optional[str]
) -> Optional[str]:
    """Keep the active id if it is reachable, otherwise fall back to the first board."""
    if active_board_id is not None and board_exists(items, active_board_id):
        return active_board_id
    return first_board_id(items)


def unique_boards(index: BoardsIndex) -> List[Board]:
    """Reachable boards in list order, each id only on its first occurrence."""
    seen = set()
    boards = []
    for board in iter_boards(index.items):
        if board.id in seen:
            continue
        seen.add(board.id)
        boards.append(board)
    return boards
