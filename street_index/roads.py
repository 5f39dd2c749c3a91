"""
Deduplication and classification of street grid references.
"""

# Standard Library
import dataclasses

# local repo modules
import street_index as sidx
import street_index.grid


GridPosition = sidx.grid.GridPosition
StreetEntry = sidx.grid.StreetEntry


@dataclasses.dataclass(frozen=True)
class SingleCell:
	"""
	Street contained in one cell, e.g. "Valley Road -> A6".
	"""

	position: GridPosition

	def __str__(self) -> str:
		return str(self.position)


@dataclasses.dataclass(frozen=True)
class CellPair:
	"""
	Street crossing exactly two cells, rendered "A9-I5".
	"""

	first: GridPosition
	second: GridPosition

	def __post_init__(self) -> None:
		if self.second < self.first:
			raise ValueError("cell pair positions must be in sorted order")

	def __str__(self) -> str:
		return f"{self.first}-{self.second}"


FinalizedPosition = SingleCell | CellPair


@dataclasses.dataclass(frozen=True)
class ProcessedRoad:
	name: str
	position: FinalizedPosition


@dataclasses.dataclass(frozen=True)
class UnprocessedRoad:
	name: str
	positions: tuple[GridPosition, ...]


@dataclasses.dataclass
class DeduplicatedRoads:
	"""
	Street name mapped to its sorted, duplicate-free grid positions.
	"""

	roads: dict[str, list[GridPosition]] = dataclasses.field(default_factory=dict)

	def __len__(self) -> int:
		return len(self.roads)

	def merge(self, other: "DeduplicatedRoads") -> "DeduplicatedRoads":
		"""
		Combine two results with a per-street set union.

		Args:
			other: Another deduplicated result.

		Returns:
			New DeduplicatedRoads.
		"""
		merged: dict[str, set[GridPosition]] = {}
		for source in (self.roads, other.roads):
			for name, positions in source.items():
				merged.setdefault(name, set()).update(positions)
		return build_deduplicated(merged)


#============================================
def build_deduplicated(groups: dict[str, set[GridPosition]]) -> DeduplicatedRoads:
	"""
	Sort grouped positions into a DeduplicatedRoads result.

	Args:
		groups: Positions by street name.

	Returns:
		DeduplicatedRoads with keys and positions in sorted order.
	"""
	roads = {name: sorted(groups[name]) for name in sorted(groups)}
	return DeduplicatedRoads(roads=roads)


#============================================
def deduplicate_roads(entries: list[StreetEntry]) -> DeduplicatedRoads:
	"""
	Group street entries by name and drop repeated positions.

	Input:
		Mayer Street A4
		Mayer Street A5
		Mayer Street A4

	Output:
		Mayer Street -> [A4, A5]

	Args:
		entries: Street entries in any order.

	Returns:
		DeduplicatedRoads.
	"""
	groups: dict[str, set[GridPosition]] = {}
	for entry in entries:
		groups.setdefault(entry.street_name, set()).add(entry.position)
	return build_deduplicated(groups)


#============================================
def classify_roads(
	roads: DeduplicatedRoads,
) -> tuple[list[ProcessedRoad], list[UnprocessedRoad]]:
	"""
	Split streets into compact references and ones needing manual review.

	One position gives a SingleCell, two give a CellPair. Three or more
	cannot be shown as a two-endpoint range, so the street goes to the
	unprocessed list with all of its positions.

	Args:
		roads: Deduplicated roads.

	Returns:
		Tuple of (processed, unprocessed), both in street-name order.
	"""
	processed: list[ProcessedRoad] = []
	unprocessed: list[UnprocessedRoad] = []
	for name in sorted(roads.roads):
		positions = sorted(set(roads.roads[name]))
		if not positions:
			continue
		if len(positions) == 1:
			processed.append(ProcessedRoad(name, SingleCell(positions[0])))
		elif len(positions) == 2:
			processed.append(ProcessedRoad(name, CellPair(positions[0], positions[1])))
		else:
			unprocessed.append(UnprocessedRoad(name, tuple(positions)))
	return (processed, unprocessed)
