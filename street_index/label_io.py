"""
Reading label rectangles from JSON or tab-separated files.
"""

# Standard Library
import csv
import json
import pathlib

# local repo modules
import street_index as sidx
import street_index.config
import street_index.grid


LabelRect = sidx.grid.LabelRect
GeometryError = sidx.config.GeometryError

LABEL_FIELDS = ("street_name", "x_from_left", "y_from_top", "width", "height")


#============================================
def record_to_label_rect(record: dict, index: int) -> LabelRect:
	"""
	Build a LabelRect from one input record.

	Args:
		record: Mapping with the label fields.
		index: Record index for error messages.

	Returns:
		LabelRect.
	"""
	missing = [name for name in LABEL_FIELDS if record.get(name) in (None, "")]
	if missing:
		raise GeometryError(f"record {index}: missing {', '.join(missing)}")
	values = {}
	for name in LABEL_FIELDS[1:]:
		try:
			values[name] = float(record[name])
		except (TypeError, ValueError) as error:
			raise GeometryError(f"record {index}: {name} is not a number ({record[name]!r})") from error
	return LabelRect(street_name=str(record["street_name"]).strip(), **values)


#============================================
def load_label_rects(path: pathlib.Path) -> list[LabelRect]:
	"""
	Load label rectangles from a .json or .tsv file.

	Args:
		path: Input path.

	Returns:
		List of LabelRect entries in file order.
	"""
	path = pathlib.Path(path)
	if path.suffix.lower() == ".json":
		records = json.loads(path.read_text(encoding="utf-8"))
		if not isinstance(records, list):
			raise GeometryError(f"{path}: expected a JSON list of labels")
	else:
		with path.open("r", encoding="utf-8", newline="") as handle:
			records = list(csv.DictReader(handle, delimiter="\t"))
	return [record_to_label_rect(record, index) for index, record in enumerate(records)]


#============================================
def gather_label_paths(
	inputs: list[str],
	exclude: list[pathlib.Path] | None = None,
) -> list[pathlib.Path]:
	"""
	Gather label files from input paths.

	Args:
		inputs: Files or directories.
		exclude: Paths to skip, such as this run's own outputs.

	Returns:
		Sorted list of .json and .tsv paths.
	"""
	paths: list[pathlib.Path] = []
	for entry in inputs:
		path = pathlib.Path(entry).expanduser().resolve()
		if path.is_dir():
			paths.extend(sorted(path.rglob("*.json")))
			paths.extend(sorted(path.rglob("*.tsv")))
			continue
		if path.is_file() and path.suffix.lower() in (".json", ".tsv"):
			paths.append(path)
	skipped = {pathlib.Path(path).expanduser().resolve() for path in (exclude or [])}
	return sorted(path for path in paths if path not in skipped)
