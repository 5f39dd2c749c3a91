import json
import pathlib

import pypdf

import street_index.cli


#============================================
def test_run_pipeline_outputs(tmp_path: pathlib.Path, fixtures_dir: pathlib.Path) -> None:
	"""
	Run the CLI pipeline on the sample labels and check every output.
	"""
	labels_path = fixtures_dir / "sample_labels.json"
	output_path = tmp_path / "index.txt"
	pdf_path = tmp_path / "index.pdf"
	overlay_path = tmp_path / "grid.pdf"
	args = street_index.cli.parse_args([
		str(labels_path),
		"-o", str(output_path),
		"--pdf", str(pdf_path),
		"--overlay-output", str(overlay_path),
	])
	result = street_index.cli.run_pipeline(args)

	assert result.processed_roads == 4
	assert result.unprocessed_roads == 2
	assert result.pages == 1

	text = output_path.read_bytes().decode("utf-8")
	assert "Canterbury Road\tB2-E2\r\n" in text
	assert "High Street\tH8\tH10\tJ8\tJ10\r\n" in text

	assert len(pypdf.PdfReader(str(pdf_path)).pages) == 1
	assert len(pypdf.PdfReader(str(overlay_path)).pages) == 1

	manifest = json.loads(pathlib.Path(f"{output_path}.json").read_text(encoding="utf-8"))
	assert manifest["labels"] == 9
	assert manifest["street_entries"] == 16
	assert manifest["grid"]["columns"] == 10
	assert manifest["grid"]["sampling"] == "CORNERS"


#============================================
def test_build_grid_config_flags() -> None:
	"""
	Grid flags map onto the grid configuration.
	"""
	args = street_index.cli.parse_args([
		"labels.json",
		"-o", "index.txt",
		"-W", "25",
		"-H", "30",
		"--right-to-left",
		"--row-offset", "4",
		"--full-coverage",
	])
	config = street_index.cli.build_grid_config(args)
	assert config.cell_width == 25.0
	assert config.cell_height == 30.0
	assert config.column_direction == "RIGHT_TO_LEFT"
	assert config.row_direction == "TOP_TO_BOTTOM"
	assert config.row_offset == 4
	assert config.sampling == "FULL"


#============================================
def test_rerun_skips_own_outputs(tmp_path: pathlib.Path, fixtures_dir: pathlib.Path) -> None:
	"""
	Outputs written into the label directory are not read back as labels.
	"""
	labels_dir = tmp_path / "labels"
	labels_dir.mkdir()
	labels_text = (fixtures_dir / "sample_labels.json").read_text(encoding="utf-8")
	(labels_dir / "sample_labels.json").write_text(labels_text, encoding="utf-8")
	output_path = labels_dir / "index.txt"
	argv = [str(labels_dir), "-o", str(output_path)]

	first = street_index.cli.run_pipeline(street_index.cli.parse_args(argv))
	assert pathlib.Path(f"{output_path}.json").exists()
	second = street_index.cli.run_pipeline(street_index.cli.parse_args(argv))
	assert second == first

	manifest = json.loads(pathlib.Path(f"{output_path}.json").read_text(encoding="utf-8"))
	assert manifest["labels"] == 9
	assert len(manifest["inputs"]) == 1
