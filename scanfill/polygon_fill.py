"""
Preenchimento e triangulação de polígonos por scanline (ET/AET)
"""
import logging
import math
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

Vertex = Sequence[float]
Point2D = Tuple[float, float]
Triangle = Tuple[Point2D, Point2D, Point2D]
ColorRGB = Tuple[float, float, float]


class Span(NamedTuple):
    y: int
    x_start: int
    x_end: int


class PixelPoint(NamedTuple):
    y: int
    x: int


Fragment = Union[Span, PixelPoint]
FragmentSink = Callable[[Fragment, ColorRGB], None]


class Edge:
    def __init__(self, y_min: int, y_max: int, x_of_y_min: float, inv_slope: float):
        self.y_min = y_min
        self.y_max = y_max
        self.x = x_of_y_min
        self.inv_slope = inv_slope

    def is_active_at(self, y: int) -> bool:
        return y < self.y_max

    def step(self):
        self.x += self.inv_slope

    def __repr__(self):
        return (f"Edge(y_min={self.y_min}, y_max={self.y_max}, "
                f"x={self.x:.3f}, inv_slope={self.inv_slope:.3f})")


EdgeTable = List[List[Edge]]


def _round_half_up(v: float) -> int:
    return math.floor(v + 0.5)


def _is_valley(vertices: Sequence[Vertex], index: int) -> bool:
    """
    Vértice de vale: os dois vizinhos estão em linhas estritamente maiores.

    Um vizinho na mesma linha (aresta horizontal) não forma vale.
    """
    n = len(vertices)
    y = _round_half_up(vertices[index][1])
    prev_y = _round_half_up(vertices[(index - 1) % n][1])
    next_y = _round_half_up(vertices[(index + 1) % n][1])
    return prev_y > y and next_y > y


def build_edge_table(vertices: Sequence[Vertex], bound_height: int) -> EdgeTable:
    """
    Constrói a Edge Table (ET): lista indexada pela linha inicial de cada aresta

    Args:
        vertices: Vértices do polígono em ordem (o último liga-se ao primeiro)
        bound_height: Altura da área de desenho (número de linhas)

    Returns:
        Lista com ``bound_height`` baldes de arestas
    """
    edge_table: EdgeTable = [[] for _ in range(max(0, bound_height))]
    n = len(vertices)
    if n < 2:
        return edge_table

    for i in range(n):
        x0, y0 = float(vertices[i][0]), _round_half_up(vertices[i][1])
        x1, y1 = float(vertices[(i + 1) % n][0]), _round_half_up(vertices[(i + 1) % n][1])

        if y0 == y1:
            # horizontal: só registra a linha, nunca entra na AET
            if 0 <= y0 < bound_height:
                edge_table[y0].append(Edge(y0, y0, x0, 0.0))
            continue

        inv_slope = (x1 - x0) / (y1 - y0)
        if y0 < y1:
            lower, y_min, y_max, x_start = i, y0, y1, x0
        else:
            lower, y_min, y_max, x_start = (i + 1) % n, y1, y0, x1

        if _is_valley(vertices, lower):
            y_min += 1
            x_start += inv_slope

        if 0 <= y_min < bound_height:
            edge_table[y_min].append(Edge(y_min, y_max, x_start, inv_slope))

    return edge_table


def _scan(edge_table: EdgeTable, visit_row: Callable[[int, List[Edge]], None]):
    """Percorre as linhas mantendo a AET e chama ``visit_row`` a cada linha"""
    non_empty = [y for y, bucket in enumerate(edge_table) if bucket]
    if not non_empty:
        return
    last_bucket = non_empty[-1]

    AET: List[Edge] = []
    for y in range(non_empty[0], len(edge_table)):
        AET.extend(e for e in edge_table[y] if e.is_active_at(y))
        # sort estável: empates mantêm a ordem de inserção
        AET.sort(key=lambda e: e.x)

        visit_row(y, AET)

        for e in AET:
            e.step()
        AET = [e for e in AET if e.is_active_at(y + 1)]

        if not AET and y >= last_bucket:
            break


def fill(vertices: Sequence[Vertex], color: ColorRGB, bound_height: int, bound_width: int,
         sink: Optional[FragmentSink] = None) -> List[Fragment]:
    """
    Preenche o polígono com spans horizontais (regra par-ímpar)

    Args:
        vertices: Vértices do polígono (mínimo 3)
        color: Cor de preenchimento (r, g, b normalizados), repassada ao ``sink``
        bound_height: Altura da área de desenho
        bound_width: Largura da área de desenho; spans são recortados em [0, largura-1]
        sink: Callback opcional chamado com cada fragmento e a cor

    Returns:
        Spans e pontos isolados, de cima para baixo
    """
    if len(vertices) < 3:
        return []

    fragments: List[Fragment] = []

    def emit(fragment: Fragment):
        fragments.append(fragment)
        if sink is not None:
            sink(fragment, color)

    def visit_row(y: int, AET: List[Edge]):
        for i in range(0, len(AET) - 1, 2):
            x_start = max(_round_half_up(AET[i].x), 0)
            x_end = min(_round_half_up(AET[i + 1].x), bound_width - 1)
            if x_start <= x_end:
                emit(Span(y, x_start, x_end))
        if len(AET) % 2 == 1:
            x = _round_half_up(AET[-1].x)
            if 0 <= x < bound_width:
                emit(PixelPoint(y, x))

    _scan(build_edge_table(vertices, bound_height), visit_row)
    logger.debug("fill: %d vértices, %d fragmentos", len(vertices), len(fragments))
    return fragments


def triangulate(vertices: Sequence[Vertex], bound_height: int) -> List[Triangle]:
    """
    Triangula o polígono em faixas de uma linha de altura

    Cada par da AET na linha y vira um trapézio até y + 1, dividido em dois
    triângulos. Funciona com polígonos côncavos e com auto-interseção.
    """
    if len(vertices) < 3:
        return []

    triangles: List[Triangle] = []

    def visit_row(y: int, AET: List[Edge]):
        for i in range(0, len(AET) - 1, 2):
            left, right = AET[i], AET[i + 1]
            top_left = (left.x, float(y))
            top_right = (right.x, float(y))
            bottom_left = (left.x + left.inv_slope, float(y + 1))
            bottom_right = (right.x + right.inv_slope, float(y + 1))
            triangles.append((top_left, top_right, bottom_left))
            triangles.append((top_right, bottom_right, bottom_left))

    _scan(build_edge_table(vertices, bound_height), visit_row)
    logger.debug("triangulate: %d vértices, %d triângulos", len(vertices), len(triangles))
    return triangles
