"""Unit tests for the generate-shapes command."""

import json
import textwrap

import pytest

from glassact_data.cli import main
from glassact_data.domain.catalog import BUILTIN_ENTITIES


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "shapes"


def _entity_file(tmp_path, text: str):
    path = tmp_path / "entities.yaml"
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return str(path)


def test_generates_builtin_catalog(out_dir):
    assert main(["--out", str(out_dir)]) == 0

    index = json.loads((out_dir / "index.json").read_text())
    assert set(index["entities"]) == {e.name for e in BUILTIN_ENTITIES}
    assert index["failed"] == []
    assert index["entities"]["CatalogItem"]["post"] == "CatalogItem/post.json"

    post = json.loads((out_dir / "CatalogItem" / "post.json").read_text())
    assert post["title"] == "PostCatalogItem"
    assert "id" not in post["properties"]
    assert len(post["properties"]) == 11


def test_output_is_deterministic(tmp_path):
    first, second = tmp_path / "a", tmp_path / "b"
    assert main(["--out", str(first), "--entity", "Inlay"]) == 0
    assert main(["--out", str(second), "--entity", "Inlay"]) == 0
    for method in ("get", "post", "patch", "put"):
        a = (first / "Inlay" / f"{method}.json").read_text()
        b = (second / "Inlay" / f"{method}.json").read_text()
        assert a == b


def test_entity_filter(out_dir):
    assert main(["--out", str(out_dir), "--entity", "Project", "--entity", "Project"]) == 0
    index = json.loads((out_dir / "index.json").read_text())
    assert list(index["entities"]) == ["Project"]


def test_shape_format_writes_field_tables(out_dir):
    assert main(["--out", str(out_dir), "--entity", "CatalogItem", "--format", "shape"]) == 0
    doc = json.loads((out_dir / "CatalogItem" / "get.json").read_text())
    assert doc["method"] == "GET"
    assert [f["name"] for f in doc["fields"]][:2] == ["id", "uuid"]
    assert len(doc["fields"]) == 16


def test_unknown_entity_exits_2(out_dir, capsys):
    assert main(["--out", str(out_dir), "--entity", "Nope"]) == 2
    assert "Nope" in capsys.readouterr().err
    assert not out_dir.exists()


def test_reserved_field_exits_2_naming_path(tmp_path, out_dir, capsys):
    path = _entity_file(
        tmp_path,
        """
        entities:
          - name: Widget
            fields:
              version: integer
        """,
    )
    assert main(["--entity-file", path, "--out", str(out_dir)]) == 2
    assert "Widget.version" in capsys.readouterr().err


def test_ambiguous_entity_exits_1_and_others_still_generate(tmp_path, out_dir, capsys):
    path = _entity_file(
        tmp_path,
        """
        entities:
          - name: Good
            fields:
              name: string
          - name: Bad
            fields:
              info: ExternalInfo
        """,
    )
    assert main(["--entity-file", path, "--out", str(out_dir)]) == 1
    assert "Bad.info" in capsys.readouterr().err
    assert (out_dir / "Good" / "get.json").exists()
    assert not (out_dir / "Bad").exists()

    index = json.loads((out_dir / "index.json").read_text())
    assert index["failed"] == ["Bad"]


def test_usage_error_exits_2(out_dir):
    assert main(["--out", str(out_dir), "--format", "xml"]) == 2
