import json
import tempfile
from pathlib import Path

import table_config
from table_config import TableConfig, config_from_dict, load_config
from view_models import SortType


def test_load_config_defaults_without_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = load_config(str(Path(tmp) / "gridstate" / "config.json"))
        assert cfg == TableConfig()
        assert cfg.searchable_columns is None
        assert cfg.default_ordering is None


def test_load_config_uses_module_default_path():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_path = Path(tmp) / "config.json"
        cfg_path.write_text(json.dumps({"minimum_column_width": 12}))
        orig_json = table_config.CONFIG_JSON
        try:
            table_config.CONFIG_JSON = str(cfg_path)
            assert load_config().minimum_column_width == 12.0
        finally:
            table_config.CONFIG_JSON = orig_json


def test_load_config_reads_json_overrides():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_path = Path(tmp) / "config.json"
        cfg_path.write_text(
            json.dumps(
                {
                    "searchable_columns": ["Name", "City"],
                    "minimum_column_width": 90,
                    "scale_columns_to_fill_frame": False,
                    "default_sort_column": 1,
                    "default_sort_direction": "desc",
                    "theme": "dark",
                }
            )
        )
        cfg = load_config(str(cfg_path))
        assert cfg.searchable_columns == frozenset({"Name", "City"})
        assert cfg.minimum_column_width == 90.0
        assert cfg.scale_columns_to_fill_frame is False
        assert cfg.default_ordering.index == 1
        assert cfg.default_ordering.order is SortType.DESCENDING
        assert cfg.extra == {"theme": "dark"}


def test_invalid_fields_fall_back_to_defaults():
    cfg = config_from_dict(
        {
            "searchable_columns": "Name",
            "minimum_column_width": "wide",
            "scale_columns_to_fill_frame": "yes",
            "default_sort_column": -1,
            "default_sort_direction": "sideways",
        }
    )
    assert cfg == TableConfig()


def test_malformed_json_gives_defaults():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_path = Path(tmp) / "config.json"
        cfg_path.write_text("{not json")
        assert load_config(str(cfg_path)) == TableConfig()


def test_non_object_json_gives_defaults():
    assert config_from_dict(["a"]) == TableConfig()


def test_with_options_freezes_searchable_columns():
    cfg = TableConfig().with_options(searchable_columns=["A"], minimum_column_width=5)
    assert cfg.searchable_columns == frozenset({"A"})
    assert cfg.minimum_column_width == 5
