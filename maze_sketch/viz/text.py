from typing import List
from maze_sketch.core.grid import Grid
from maze_sketch.algo.dfs import RecursiveBacktracker

HEAD_MARK = "@"
PATH_MARK = "*"
VISITED_MARK = " "
UNVISITED_MARK = "."


def cell_mark(generator: RecursiveBacktracker, x: int, y: int) -> str:
    if (x, y) == generator.head:
        return HEAD_MARK
    if (x, y) in generator.path:
        return PATH_MARK
    if (x, y) in generator.visited:
        return VISITED_MARK
    return UNVISITED_MARK


def render_text(generator: RecursiveBacktracker) -> str:
    """
    Draws the maze in +---+ style, one text row for cell interiors and
    one for the walls below them.
    """
    grid = generator.grid
    lines: List[str] = ["+" + "---+" * grid.width]

    for y in range(grid.height):
        row = "|"
        below = "+"
        for x in range(grid.width):
            val = grid.cells[grid.get_index(x, y)]
            row += f" {cell_mark(generator, x, y)} "
            row += " " if val & Grid.RIGHT else "|"
            below += "   +" if val & Grid.DOWN else "---+"
        lines.append(row)
        lines.append(below)

    return "\n".join(lines)
