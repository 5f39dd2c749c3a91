#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Refresh the sample street index baseline for tests.
"""

import json
import pathlib

import street_index as sidx
import street_index.config
import street_index.export
import street_index.grid
import street_index.label_io
import street_index.roads


#============================================
def get_repo_root() -> pathlib.Path:
	"""
	Get the repository root from this script's location.

	Returns:
		Repository root path.
	"""
	return pathlib.Path(__file__).resolve().parent


#============================================
def write_json(path: pathlib.Path, payload: dict) -> None:
	"""
	Write a JSON payload to disk.

	Args:
		path: Output path.
		payload: JSON payload.
	"""
	text = json.dumps(payload, indent=2, sort_keys=True)
	path.write_text(text + "\n", encoding="utf-8")


#============================================
def build_index_rows(labels_path: pathlib.Path) -> dict:
	"""
	Build processed and unprocessed index rows for the sample labels.

	Args:
		labels_path: Sample label JSON path.

	Returns:
		Dict with "processed" and "unprocessed" row lists.
	"""
	if not labels_path.exists():
		raise AssertionError(f"{labels_path} not found.")

	bbox = sidx.config.BoundingBox(
		width=sidx.config.DEFAULT_PAGE_WIDTH,
		height=sidx.config.DEFAULT_PAGE_HEIGHT,
	)
	config = sidx.config.GridConfig(
		cell_width=sidx.config.DEFAULT_CELL_WIDTH,
		cell_height=sidx.config.DEFAULT_CELL_HEIGHT,
	)
	grid = sidx.grid.Grid(bbox, config)
	grid.insert_labels(sidx.label_io.load_label_rects(labels_path))
	roads = sidx.roads.deduplicate_roads(grid.drain())
	processed, unprocessed = sidx.roads.classify_roads(roads)
	return {
		"processed": [sidx.export.format_processed_row(road) for road in processed],
		"unprocessed": [sidx.export.format_unprocessed_row(road) for road in unprocessed],
	}


#============================================
def main() -> None:
	"""
	Run the baseline refresh.
	"""
	fixtures_dir = get_repo_root() / "tests" / "fixtures"
	rows = build_index_rows(fixtures_dir / "sample_labels.json")
	write_json(fixtures_dir / "expected_index.json", rows)
	print("Updated street index baseline in tests/fixtures.")


if __name__ == "__main__":
	main()
