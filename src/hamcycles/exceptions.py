"""Exception hierarchy for hamcycles."""


class HamCyclesError(Exception):
    """Base exception for all hamcycles errors."""

    pass


class InvalidInputError(HamCyclesError):
    """Input that violates the preconditions of the geometry or the search."""

    pass


class InvalidCoordinateError(InvalidInputError):
    """Coordinate value that cannot be represented as an exact rational."""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid coordinate {value!r}: {reason}")


class DuplicatePointError(InvalidInputError):
    """Point coincides exactly with an existing vertex."""

    def __init__(self, point: object, existing_index: int) -> None:
        self.point = point
        self.existing_index = existing_index
        super().__init__(
            f"Point {point} coincides with existing vertex {existing_index}"
        )


class CollinearPointsError(InvalidInputError):
    """Three points lie exactly on one line (input not in general position)."""

    def __init__(self, point: object, first: int, second: int) -> None:
        self.point = point
        self.first = first
        self.second = second
        super().__init__(
            f"Point {point} is collinear with vertices {first} and {second}; "
            "points must be in general position"
        )


class VertexIndexError(InvalidInputError):
    """Vertex index outside the graph's vertex range."""

    def __init__(self, index: int, vertex_count: int) -> None:
        self.index = index
        self.vertex_count = vertex_count
        super().__init__(
            f"Vertex index {index} out of range for graph with {vertex_count} vertices"
        )


class InvalidEdgeError(InvalidInputError):
    """Edge request that can never be valid, such as a loop."""

    def __init__(self, edge: tuple[int, int], reason: str) -> None:
        self.edge = edge
        self.reason = reason
        super().__init__(f"Invalid edge {edge}: {reason}")


class PointFileError(InvalidInputError):
    """Errors related to reading or writing point set files."""

    pass


class PointFileNotFoundError(PointFileError):
    """Point set file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Point file not found: '{path}'")


class PointFileFormatError(PointFileError):
    """Malformed line in a point set file."""

    def __init__(self, path: str, line_number: int, details: str) -> None:
        self.path = path
        self.line_number = line_number
        self.details = details
        super().__init__(f"Invalid point file '{path}' (line {line_number}): {details}")


class PreconditionError(HamCyclesError):
    """Operation called in a state where its precondition does not hold."""

    pass


class EdgeNotVisibleError(PreconditionError):
    """Attempt to commit an edge that is not in the visibility set."""

    def __init__(self, edge: tuple[int, int]) -> None:
        self.edge = edge
        super().__init__(
            f"Edge {edge} is not visible: it crosses a committed edge or is already committed"
        )


class GraphInvariantError(HamCyclesError):
    """Visibility graph state does not match its geometric definition."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class SearchError(HamCyclesError):
    """Error raised while enumerating cycles."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cycle search failed: {reason}")
