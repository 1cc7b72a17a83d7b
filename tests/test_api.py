"""Tests for the parse_toc / TocResult facade and exports."""

import json

import pandas as pd
import pytest

from toc_processor.api import ENTRY_COLUMNS, parse_toc, parse_toc_file

TOC_TEXT = "Chapter 1: Intro 1\n  Section A 3\n  Section B\nChapter 2: End 9\n"


class TestParseToc:
    def test_result_fields(self):
        result = parse_toc(TOC_TEXT)
        assert result.source == "<text>"
        assert result.looks_like_toc is True
        assert len(result.toc.flat_entries) == 4
        assert result.tree_md.startswith("- Chapter 1: Intro  *(p. 1)*\n  - Section A  *(p. 3)*\n")

    def test_prose_flagged(self):
        result = parse_toc("just one line of prose")
        assert result.looks_like_toc is False
        assert len(result.toc.flat_entries) == 1

    def test_entries_df(self):
        df = parse_toc(TOC_TEXT).entries_df()
        assert list(df.columns) == ENTRY_COLUMNS
        assert df["id"].tolist() == ["toc-0", "toc-1", "toc-2", "toc-3"]
        assert df["level"].tolist() == [1, 2, 2, 1]
        assert pd.isna(df.loc[0, "parent_id"])
        assert df.loc[1, "parent_id"] == "toc-0"
        assert df.loc[2, "parent_id"] == "toc-0"
        assert df.loc[1, "path"] == "Chapter 1: Intro > Section A"
        assert df.loc[1, "page_number"] == 3
        assert pd.isna(df.loc[2, "page_number"])

    def test_entries_df_empty(self):
        df = parse_toc("").entries_df()
        assert list(df.columns) == ENTRY_COLUMNS
        assert len(df) == 0


class TestParseTocFile:
    def test_reads_file(self, tmp_path):
        p = tmp_path / "toc.txt"
        p.write_text(TOC_TEXT, encoding="utf-8")
        result = parse_toc_file(str(p))
        assert result.source == str(p)
        assert [e.title for e in result.toc.entries] == ["Chapter 1: Intro", "Chapter 2: End"]

    def test_utf8_bom_is_dropped(self, tmp_path):
        p = tmp_path / "bom.txt"
        p.write_bytes("\ufeffChapter 1: Intro\n  Section A 2\n".encode("utf-8"))
        first = parse_toc_file(str(p)).toc.flat_entries[0]
        assert first.title == "Chapter 1: Intro"
        assert first.level == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_toc_file(str(tmp_path / "nope.txt"))


class TestExport:
    def test_writes_outputs(self, tmp_path):
        out = tmp_path / "out"
        parse_toc(TOC_TEXT).export(str(out))

        tree = json.loads((out / "tree.json").read_text(encoding="utf-8"))
        assert [e["id"] for e in tree["entries"]] == ["toc-0", "toc-3"]
        assert [c["title"] for c in tree["entries"][0]["children"]] == ["Section A", "Section B"]
        assert "page_number" not in tree["entries"][0]["children"][1]

        lines = (out / "entries.jsonl").read_text(encoding="utf-8").splitlines()
        records = [json.loads(ln) for ln in lines]
        assert [r["id"] for r in records] == ["toc-0", "toc-1", "toc-2", "toc-3"]
        assert all("children" not in r for r in records)

        assert (out / "tree.md").read_text(encoding="utf-8").startswith("- Chapter 1: Intro")

    def test_tree_json_matches_to_dict(self, tmp_path):
        result = parse_toc(TOC_TEXT)
        result.export(str(tmp_path))
        tree = json.loads((tmp_path / "tree.json").read_text(encoding="utf-8"))
        assert tree == result.toc.to_dict()

    def test_empty_toc_json(self, tmp_path):
        parse_toc("").export(str(tmp_path))
        tree = json.loads((tmp_path / "tree.json").read_text(encoding="utf-8"))
        assert tree == {"entries": [], "flat_entries": []}


class TestDeepInput:
    """Deeply indented input parses, tabulates and exports."""

    DEEP = "\n".join("  " * k + "x" for k in range(1200))

    def test_parse_and_entries_df(self):
        result = parse_toc(self.DEEP)
        assert result.tree_md.splitlines()[-1] == "  " * 1199 + "- x"
        df = result.entries_df()
        assert len(df) == 1200
        assert df.loc[1199, "parent_id"] == "toc-1198"

    def test_export(self, tmp_path):
        parse_toc(self.DEEP).export(str(tmp_path))
        assert (tmp_path / "tree.json").read_text(encoding="utf-8").startswith('{"entries": [')
        assert len((tmp_path / "entries.jsonl").read_text(encoding="utf-8").splitlines()) == 1200
