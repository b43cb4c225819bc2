# Copyright (c) 2026 Frame Contributors. All Rights Reserved.
"""Unit tests for the bundle assembler."""

import json

import pytest
from pydantic import ValidationError

from frame_context.bundle.assembler import (
    BUNDLE_FILENAME,
    BundleAssembler,
    BundleOptions,
    pick_tree_ref,
)
from frame_context.catalog.models import FileRef
from frame_context.core.metrics import frame_metrics
from frame_context.curation.curator import CuratorLimits
from frame_context.maps.changes import ALL_CHANGED

TREE = FileRef(source="outputs", path="maps/records_tree.txt")
INDEX = FileRef(source="outputs", path="maps/records_map.md")


class AlwaysChanged:
    def changed_paths(self, source_root):
        return ALL_CHANGED


@pytest.fixture
def assembler(sample_project):
    return BundleAssembler(sample_project, change_detector=AlwaysChanged())


class TestPickTreeRef:
    def test_prefers_tree(self):
        assert pick_tree_ref([INDEX, TREE]) == TREE

    def test_falls_back_to_first(self):
        other = FileRef(source="outputs", path="maps/other.md")
        assert pick_tree_ref([other, INDEX]) == other

    def test_empty(self):
        assert pick_tree_ref([]) is None


class TestBundleOptions:
    def test_empty_request_rejected(self):
        with pytest.raises(ValidationError):
            BundleOptions(request="")

    def test_defaults(self):
        opts = BundleOptions(request="x")
        assert opts.run_dir is None
        assert opts.output_ref_source == "outputs"
        assert opts.limits == CuratorLimits()


class TestBundleAssembler:
    def test_read_order(self, assembler, now):
        bundle = assembler.build(BundleOptions(request="meeting summary"), now=now)
        order = bundle.context_read_order

        expected = []
        expected.append(bundle.profile)
        expected.extend(bundle.skills)
        expected.extend(bundle.tools)
        expected.extend(bundle.maps)
        expected.extend(bundle.records)
        assert order == expected
        assert order[0] == FileRef(source="default", path="profiles/analyst.md")
        assert bundle.maps == [TREE, INDEX]

    def test_maps_precede_records(self, assembler, now):
        bundle = assembler.build(BundleOptions(request="latest"), now=now)
        order = bundle.context_read_order
        last_map = max(order.index(m) for m in bundle.maps)
        assert all(order.index(r) > last_map for r in bundle.records)

    def test_tree_preview_marks_selection(self, assembler, sample_project, now):
        bundle = assembler.build(
            BundleOptions(request="meeting summary", limits=CuratorLimits(max_records=1)),
            now=now,
        )
        tree = (sample_project / "maps" / "records_tree.txt").read_text(encoding="utf-8")
        assert bundle.records_tree_preview == tree
        assert "[SELECTED] weekly sync (2026-02-05)" in tree
        assert tree.count("[SELECTED]") == 1

    def test_original_request_and_notes(self, assembler, now):
        bundle = assembler.build(BundleOptions(request="meeting summary"), now=now)
        assert bundle.original_request == "meeting summary"
        assert bundle.notes.startswith("Selected profile: analyst.")
        assert frame_metrics.get_counter("bundles_built") == 1

    def test_empty_catalog(self, project_root):
        assembler = BundleAssembler(project_root, change_detector=AlwaysChanged())
        bundle = assembler.build(BundleOptions(request="anything"))
        assert bundle.profile is None
        assert bundle.skills == [] and bundle.records == []
        assert bundle.context_read_order == [TREE, INDEX]
        assert bundle.notes == "No entities selected."
        assert bundle.records_tree_preview.startswith("Records Tree")

    def test_no_file_without_run_dir(self, assembler, sample_project):
        assembler.build(BundleOptions(request="summary"))
        assert not list(sample_project.rglob(BUNDLE_FILENAME))

    def test_written_to_run_dir(self, assembler, sample_project, now):
        bundle = assembler.build(BundleOptions(request="summary", run_dir="runs/r1"), now=now)
        path = sample_project / "runs" / "r1" / BUNDLE_FILENAME
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == bundle.model_dump(mode="json")
        assert data["maps"][0] == {"source": "outputs", "path": "maps/records_tree.txt"}
        assert set(data) == {
            "original_request", "profile", "skills", "tools", "records", "maps",
            "context_read_order", "records_tree_preview", "notes",
        }

    def test_write_error_propagates(self, assembler, sample_project):
        (sample_project / "blocked").write_text("not a directory")
        with pytest.raises(OSError):
            assembler.build(BundleOptions(request="summary", run_dir="blocked"))

    def test_supplied_catalog_used(self, assembler):
        bundle = assembler.build(BundleOptions(request="summary"), catalog={})
        assert bundle.profile is None
        assert bundle.records == []
