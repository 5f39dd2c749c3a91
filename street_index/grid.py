"""
Grid cell assignment for street-name labels.
"""

# Standard Library
import dataclasses
import functools
import math
import re

# local repo modules
import street_index as sidx
import street_index.column_label
import street_index.config


BoundingBox = sidx.config.BoundingBox
GridConfig = sidx.config.GridConfig
ConfigError = sidx.config.ConfigError
GeometryError = sidx.config.GeometryError

column_label = sidx.column_label.column_label
column_sort_key = sidx.column_label.column_sort_key

RIGHT_TO_LEFT = sidx.config.RIGHT_TO_LEFT
BOTTOM_TO_TOP = sidx.config.BOTTOM_TO_TOP
SAMPLING_FULL = sidx.config.SAMPLING_FULL
PROGRESS_BAR_WIDTH = sidx.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = sidx.config.PROGRESS_UPDATE_EVERY

POSITION_PATTERN = re.compile(r"^([A-Z]+)([1-9][0-9]*)$")


@dataclasses.dataclass
class LabelRect:
	street_name: str
	x_from_left: float
	y_from_top: float
	width: float
	height: float


@functools.total_ordering
@dataclasses.dataclass(frozen=True)
class GridPosition:
	"""
	One grid cell reference such as "A9".

	Ordered by column (shorter labels first, so "Z" < "AA"), then by row.
	"""

	column: str
	row: int

	def sort_key(self) -> tuple[int, str, int]:
		length, label = column_sort_key(self.column)
		return (length, label, self.row)

	def __lt__(self, other: "GridPosition") -> bool:
		if not isinstance(other, GridPosition):
			return NotImplemented
		return self.sort_key() < other.sort_key()

	def __str__(self) -> str:
		return f"{self.column}{self.row}"

	@classmethod
	def parse(cls, text: str) -> "GridPosition":
		match = POSITION_PATTERN.match(text.strip())
		if match is None:
			raise ValueError(f"invalid grid reference: {text!r}")
		return cls(column=match.group(1), row=int(match.group(2)))


@dataclasses.dataclass(frozen=True)
class StreetEntry:
	street_name: str
	position: GridPosition


#============================================
def validate_label_rect(rect: LabelRect) -> None:
	"""
	Reject label rectangles that cannot be placed on the grid.

	Args:
		rect: Label rectangle.
	"""
	if not isinstance(rect.street_name, str) or not rect.street_name.strip():
		raise GeometryError("label has an empty street name")
	for name in ("x_from_left", "y_from_top", "width", "height"):
		value = getattr(rect, name)
		if not math.isfinite(value):
			raise GeometryError(f"{rect.street_name}: {name} is not finite ({value!r})")
		if value < 0.0:
			raise GeometryError(f"{rect.street_name}: {name} must be >= 0, got {value!r}")


#============================================
def compute_grid_extent(
	rect: LabelRect,
	config: GridConfig,
	bbox: BoundingBox | None = None,
) -> tuple[float, float, float, float]:
	"""
	Compute the label extent measured from the grid origin.

	Reversed directions measure from the opposite page edge; the mirrored
	values clamp at 0 for labels hanging off the page.

	Args:
		rect: Label rectangle.
		config: Grid configuration.
		bbox: Page bounding box, required for reversed directions.

	Returns:
		Tuple of (left, top, right, bottom) in millimeters.
	"""
	if config.is_mirrored and bbox is None:
		raise ConfigError("reversed grid directions need the page bounding box")
	left = rect.x_from_left
	right = rect.x_from_left + rect.width
	if config.column_direction == RIGHT_TO_LEFT:
		left, right = (
			max(0.0, bbox.width - right),
			max(0.0, bbox.width - left),
		)
	top = rect.y_from_top
	bottom = rect.y_from_top + rect.height
	if config.row_direction == BOTTOM_TO_TOP:
		top, bottom = (
			max(0.0, bbox.height - bottom),
			max(0.0, bbox.height - top),
		)
	return (left, top, right, bottom)


#============================================
def assign_cells(
	rect: LabelRect,
	config: GridConfig,
	bbox: BoundingBox | None = None,
) -> list[GridPosition]:
	"""
	Find the grid cells touched by a label rectangle.

	Only the corner cells are sampled: a label spanning more than 2x2
	cells yields its four corners, not the interior. Set the grid
	sampling mode to FULL to enumerate every cell in the index ranges.

	Args:
		rect: Label rectangle.
		config: Grid configuration.
		bbox: Page bounding box, required for reversed directions.

	Returns:
		List of GridPosition entries (1, 2 or 4 under corner sampling).
	"""
	validate_label_rect(rect)
	left, top, right, bottom = compute_grid_extent(rect, config, bbox)

	min_col = math.floor(left / config.cell_width) + config.column_offset
	max_col = math.floor(right / config.cell_width) + config.column_offset
	# rows are 1-based, atlases have no row 0
	min_row = math.floor(top / config.cell_height) + 1 + config.row_offset
	max_row = math.floor(bottom / config.cell_height) + 1 + config.row_offset

	if config.sampling == SAMPLING_FULL:
		return [
			GridPosition(column_label(col), row)
			for col in range(min_col, max_col + 1)
			for row in range(min_row, max_row + 1)
		]

	min_label = column_label(min_col)
	if min_col == max_col and min_row == max_row:
		return [GridPosition(min_label, min_row)]
	if min_col == max_col:
		return [GridPosition(min_label, min_row), GridPosition(min_label, max_row)]
	max_label = column_label(max_col)
	if min_row == max_row:
		return [GridPosition(min_label, min_row), GridPosition(max_label, min_row)]
	return [
		GridPosition(min_label, min_row),
		GridPosition(min_label, max_row),
		GridPosition(max_label, min_row),
		GridPosition(max_label, max_row),
	]


#============================================
def grid_dimensions(bbox: BoundingBox, config: GridConfig) -> tuple[int, int]:
	"""
	Count the columns and rows needed to cover a page.

	Args:
		bbox: Page bounding box.
		config: Grid configuration.

	Returns:
		Tuple of (columns, rows).
	"""
	columns = max(1, math.ceil(bbox.width / config.cell_width))
	rows = max(1, math.ceil(bbox.height / config.cell_height))
	return (columns, rows)


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


class Grid:
	"""
	Accumulates street entries for one map page.
	"""

	def __init__(self, bbox: BoundingBox, config: GridConfig) -> None:
		self.bbox = bbox
		self.config = config
		self._entries: list[StreetEntry] = []

	def __len__(self) -> int:
		return len(self._entries)

	def insert_label(self, rect: LabelRect) -> list[StreetEntry]:
		positions = assign_cells(rect, self.config, self.bbox)
		entries = [StreetEntry(rect.street_name, position) for position in positions]
		self._entries.extend(entries)
		return entries

	def insert_labels(self, rects: list[LabelRect], verbose: bool = False) -> int:
		"""
		Insert many labels.

		Args:
			rects: Label rectangles.
			verbose: Print a progress bar.

		Returns:
			Number of entries added.
		"""
		added = 0
		total = len(rects)
		for index, rect in enumerate(rects, start=1):
			added += len(self.insert_label(rect))
			if verbose and (index % PROGRESS_UPDATE_EVERY == 0 or index == total):
				print_progress("Assigning cells", index, total)
		if verbose and total > 0:
			print()
		return added

	def drain(self) -> list[StreetEntry]:
		entries = self._entries
		self._entries = []
		return entries
