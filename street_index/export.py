"""
Tab-separated text output for processed and unprocessed roads.
"""

# Standard Library
import pathlib

# local repo modules
import street_index as sidx
import street_index.roads


ProcessedRoad = sidx.roads.ProcessedRoad
UnprocessedRoad = sidx.roads.UnprocessedRoad

LINE_TERMINATOR = "\r\n"


#============================================
def format_processed_row(road: ProcessedRoad) -> str:
	"""
	Format a processed road as "name<TAB>A9-I5".
	"""
	return f"{road.name}\t{road.position}"


#============================================
def format_unprocessed_row(road: UnprocessedRoad) -> str:
	"""
	Format an unprocessed road as "name<TAB>A1<TAB>B2<TAB>C3".
	"""
	fields = [road.name] + [str(position) for position in road.positions]
	return "\t".join(fields)


#============================================
def processed_to_csv(processed: list[ProcessedRoad]) -> str:
	return LINE_TERMINATOR.join(format_processed_row(road) for road in processed)


#============================================
def unprocessed_to_csv(unprocessed: list[UnprocessedRoad]) -> str:
	return LINE_TERMINATOR.join(format_unprocessed_row(road) for road in unprocessed)


#============================================
def write_index_text(
	output_path: pathlib.Path,
	processed: list[ProcessedRoad],
	unprocessed: list[UnprocessedRoad],
) -> None:
	"""
	Write both road lists to one text file with section headers.

	Args:
		output_path: Output text path.
		processed: Roads with one or two references.
		unprocessed: Roads needing manual review.
	"""
	sections = [
		"processed:",
		processed_to_csv(processed),
		"unprocessed:",
		unprocessed_to_csv(unprocessed),
	]
	text = LINE_TERMINATOR.join(section for section in sections if section)
	with open(output_path, "w", encoding="utf-8", newline="") as handle:
		handle.write(text)
		handle.write(LINE_TERMINATOR)
