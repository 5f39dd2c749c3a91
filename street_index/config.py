"""
Shared configuration, constants and errors.
"""

# Standard Library
import dataclasses
import math


POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4

DEFAULT_CELL_WIDTH = 20.0
DEFAULT_CELL_HEIGHT = 20.0
DEFAULT_PAGE_WIDTH = 200.0
DEFAULT_PAGE_HEIGHT = 200.0

LEFT_TO_RIGHT = "LEFT_TO_RIGHT"
RIGHT_TO_LEFT = "RIGHT_TO_LEFT"
TOP_TO_BOTTOM = "TOP_TO_BOTTOM"
BOTTOM_TO_TOP = "BOTTOM_TO_TOP"
COLUMN_DIRECTIONS = {LEFT_TO_RIGHT, RIGHT_TO_LEFT}
ROW_DIRECTIONS = {TOP_TO_BOTTOM, BOTTOM_TO_TOP}

SAMPLING_CORNERS = "CORNERS"
SAMPLING_FULL = "FULL"
SAMPLING_MODES = {SAMPLING_CORNERS, SAMPLING_FULL}

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
DEFAULT_TITLE = "Street Index"
DEFAULT_TITLE_SIZE = 14.0
DEFAULT_HEADING_SIZE = 10.0
DEFAULT_TEXT_SIZE = 8.0
DEFAULT_LEADING_FACTOR = 1.3
DEFAULT_INDEX_COLUMNS = 2
DEFAULT_INDEX_MARGIN = 36.0
DEFAULT_COLUMN_GAP = 18.0
MANUAL_REVIEW_HEADING = "Manual review"

GRID_LINE_WIDTH = 0.4
GRID_LABEL_SIZE = 7.0
GRID_LABEL_MARGIN = 2.0

PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 100


class ConfigError(ValueError):
	"""
	Raised when a grid or page configuration cannot be used.
	"""


class GeometryError(ValueError):
	"""
	Raised when a label rectangle has unusable geometry.
	"""


@dataclasses.dataclass
class BoundingBox:
	width: float
	height: float

	def __post_init__(self) -> None:
		for name in ("width", "height"):
			value = getattr(self, name)
			if not math.isfinite(value) or value <= 0.0:
				raise ConfigError(f"page {name} must be > 0, got {value!r}")


@dataclasses.dataclass
class GridConfig:
	cell_width: float
	cell_height: float
	column_direction: str = LEFT_TO_RIGHT
	row_direction: str = TOP_TO_BOTTOM
	column_offset: int = 0
	row_offset: int = 0
	sampling: str = SAMPLING_CORNERS

	def __post_init__(self) -> None:
		for name in ("cell_width", "cell_height"):
			value = getattr(self, name)
			if not math.isfinite(value) or value <= 0.0:
				raise ConfigError(f"{name} must be > 0, got {value!r}")
		if self.column_direction not in COLUMN_DIRECTIONS:
			raise ConfigError(f"unknown column direction: {self.column_direction!r}")
		if self.row_direction not in ROW_DIRECTIONS:
			raise ConfigError(f"unknown row direction: {self.row_direction!r}")
		for name in ("column_offset", "row_offset"):
			value = getattr(self, name)
			if isinstance(value, bool) or not isinstance(value, int):
				raise ConfigError(f"{name} must be an integer, got {value!r}")
			if value < 0:
				raise ConfigError(f"{name} must be >= 0, got {value!r}")
		if self.sampling not in SAMPLING_MODES:
			raise ConfigError(f"unknown sampling mode: {self.sampling!r}")

	@property
	def is_mirrored(self) -> bool:
		return self.column_direction == RIGHT_TO_LEFT or self.row_direction == BOTTOM_TO_TOP


@dataclasses.dataclass
class IndexPageConfig:
	page_width: float
	page_height: float
	margin: float = DEFAULT_INDEX_MARGIN
	columns: int = DEFAULT_INDEX_COLUMNS
	column_gap: float = DEFAULT_COLUMN_GAP
	title: str = DEFAULT_TITLE
	title_size: float = DEFAULT_TITLE_SIZE
	heading_size: float = DEFAULT_HEADING_SIZE
	text_size: float = DEFAULT_TEXT_SIZE

	def __post_init__(self) -> None:
		if self.columns < 1:
			raise ConfigError("index columns must be >= 1")
		usable_width = self.page_width - 2.0 * self.margin
		usable_height = self.page_height - 2.0 * self.margin
		if usable_width <= 0.0 or usable_height <= 0.0:
			raise ConfigError("index page margins leave no printable area")
		if self.text_size <= 0.0 or self.title_size <= 0.0 or self.heading_size <= 0.0:
			raise ConfigError("font sizes must be > 0")


@dataclasses.dataclass
class IndexResult:
	processed_roads: int
	unprocessed_roads: int
	pages: int


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to points.

	Args:
		value: Millimeter value.

	Returns:
		Points value.
	"""
	return value / MM_PER_INCH * POINTS_PER_INCH
