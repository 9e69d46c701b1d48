# dlx.py
# Algorithm X (Dancing Links) over named columns, for enumerating every tiling

from __future__ import annotations

from typing import Callable, Hashable, Iterable, Iterator


class ColumnNode:
    def __init__(self, key: Hashable):
        self.key = key
        self.size = 0
        self.left: ColumnNode = self
        self.right: ColumnNode = self
        self.up: "Node | ColumnNode" = self
        self.down: "Node | ColumnNode" = self


class Node:
    def __init__(self, column: ColumnNode, row_id: int):
        self.column = column
        self.row_id = row_id
        self.left: Node = self
        self.right: Node = self
        self.up: Node | ColumnNode = self
        self.down: Node | ColumnNode = self


class ExactCover:
    """Exact cover matrix keyed by column names.

    Every column must be covered by exactly one selected row. Columns are
    created up front so that a column no row touches makes the problem
    unsatisfiable instead of being silently ignored.
    """

    def __init__(self, column_keys: Iterable[Hashable]):
        self.header = ColumnNode(None)
        self.columns: dict[Hashable, ColumnNode] = {}
        last = self.header
        for key in column_keys:
            if key in self.columns:
                raise ValueError(f"Duplicate column {key!r}")
            col = ColumnNode(key)
            col.left = last
            col.right = self.header
            last.right = col
            self.header.left = col
            last = col
            self.columns[key] = col

    def add_row(self, row_id: int, column_keys: Iterable[Hashable]) -> None:
        first_node: Node | None = None
        prev: Node | None = None

        for key in column_keys:
            column = self.columns[key]
            node = Node(column, row_id)

            node.down = column
            node.up = column.up
            column.up.down = node
            column.up = node
            column.size += 1

            if first_node is None:
                first_node = node
            if prev is not None:
                node.left = prev
                node.right = first_node
                prev.right = node
                first_node.left = node
            prev = node

    def _cover(self, column: ColumnNode) -> None:
        column.right.left = column.left
        column.left.right = column.right
        row = column.down
        while row is not column:
            node = row.right
            while node is not row:
                node.down.up = node.up
                node.up.down = node.down
                node.column.size -= 1
                node = node.right
            row = row.down

    def _uncover(self, column: ColumnNode) -> None:
        row = column.up
        while row is not column:
            node = row.left
            while node is not row:
                node.column.size += 1
                node.down.up = node
                node.up.down = node
                node = node.left
            row = row.up
        column.right.left = column
        column.left.right = column

    def _choose_column(self) -> ColumnNode:
        # Fewest remaining rows first; ties go to the earliest column.
        c = self.header.right
        best = c
        while c is not self.header:
            if c.size < best.size:
                best = c
            c = c.right
        return best

    def solve(self, on_select: Callable[[int], None] | None = None) -> Iterator[list[int]]:
        """Yield every exact cover as a list of row ids.

        on_select is called with the row id each time a row is tried; it may
        raise to abort the enumeration. An abandoned enumeration leaves
        columns covered, so the matrix is single-use.
        """
        solution: list[Node] = []

        def search() -> Iterator[list[int]]:
            if self.header.right is self.header:
                yield [node.row_id for node in solution]
                return

            column = self._choose_column()
            if column.size == 0:
                return

            self._cover(column)

            row = column.down
            while row is not column:
                if on_select is not None:
                    on_select(row.row_id)
                solution.append(row)

                node = row.right
                while node is not row:
                    self._cover(node.column)
                    node = node.right

                yield from search()

                row = solution.pop()
                node = row.left
                while node is not row:
                    self._uncover(node.column)
                    node = node.left

                row = row.down

            self._uncover(column)

        yield from search()

