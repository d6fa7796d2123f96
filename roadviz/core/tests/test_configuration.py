# Copyright (C) 2020. Huawei Technologies Co., Ltd. All rights reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.
import configparser
import os
import tempfile
from pathlib import Path

import pytest

from roadviz.core.configuration import Config
from roadviz.core.controls import ControlMap
from roadviz.core.render.draw_map import DrawMap
from roadviz.core.render.settings import RenderSettings
from roadviz.core.tests.helpers.maps import straight_road_map


@pytest.fixture
def config_path():
    config = configparser.ConfigParser()
    config["core"] = {"debug": "True", "build_workers": "2"}
    config["render"] = {"lane_thickness": "3.0", "dash_len": "1.5"}
    with tempfile.TemporaryDirectory() as tmpdir:
        file = Path(tmpdir) / "config.ini"
        with file.open("w") as file_pointer:
            config.write(fp=file_pointer)
        yield str(file)


def test_get_setting_with_file(config_path):
    config = Config(config_path)
    assert config.get_setting("core", "debug", cast=bool) is True
    assert config.get_setting("core", "build_workers", cast=int) == 2
    assert config.get_setting("render", "lane_thickness", cast=float) == 3.0
    with pytest.raises(EnvironmentError):
        config.get_setting("nonexistent", "option")


def test_get_setting_with_environment_variables(config_path):
    config = Config(config_path, "roadviz")
    assert config.get_setting("nonexistent", "option", default=None) is None

    os.environ["ROADVIZ_NONEXISTENT_OPTION"] = "now_exists"
    config = Config(config_path, "roadviz")
    assert config.get_setting("nonexistent", "option", default=None) == "now_exists"
    del os.environ["ROADVIZ_NONEXISTENT_OPTION"]


def test_builtin_defaults(tmp_path):
    empty = tmp_path / "empty.ini"
    empty.write_text("")
    config = Config(empty)
    assert config.get_setting("core", "build_workers") == 0


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(tmp_path / "nope.ini")


def test_render_settings_from_config(config_path):
    settings = RenderSettings.from_config(Config(config_path))
    assert settings.lane_thickness == 3.0
    assert settings.dash_len == 1.5
    # Not in the file, so left at the default.
    assert settings.dash_separation == RenderSettings().dash_separation


def test_render_settings_from_packaged_config():
    default_ini = Path(__file__).parents[2] / "engine.ini"
    assert RenderSettings.from_config(Config(default_ini)) == RenderSettings()


def test_draw_map_from_config(config_path):
    road_map = straight_road_map(length=40)
    draw_map = DrawMap.from_config(road_map, ControlMap.new(road_map), Config(config_path))
    assert draw_map.settings.lane_thickness == 3.0
    bounds = draw_map.all_lanes()[0].get_bounds()
    assert bounds.max_pt.y - bounds.min_pt.y == pytest.approx(3.0)


def test_render_settings_reject_negative_values(config_path, monkeypatch):
    monkeypatch.setenv("ROADVIZ_RENDER_LANE_THICKNESS", "-2.5")
    with pytest.raises(ValueError):
        RenderSettings.from_config(Config(config_path, "roadviz"))
    with pytest.raises(ValueError):
        RenderSettings(lane_thickness=0.0)
    with pytest.raises(ValueError):
        RenderSettings(dash_len=-1.0)


def test_engine_config_lookup(config_path, monkeypatch):
    from roadviz.core import config as core_conf

    core_conf.cache_clear()
    config: Config = core_conf(config_path)
    assert config.get_setting("render", "lane_thickness", cast=float) == 3.0

    monkeypatch.setenv("ROADVIZ_RENDER_DASH_LEN", "4.0")
    core_conf.cache_clear()
    config = core_conf(config_path)
    assert config.get_setting("render", "dash_len", cast=float) == 4.0
    monkeypatch.delenv("ROADVIZ_RENDER_DASH_LEN")

    core_conf.cache_clear()
    packaged = core_conf("/definitely/not/a/file.ini")
    assert packaged.get_setting("render", "lane_thickness", cast=float) == 2.5
    core_conf.cache_clear()


def test_draw_map_from_discovered_config(config_path, tmp_path, monkeypatch):
    from roadviz.core import config as core_conf

    (tmp_path / "roadviz_engine.ini").write_text(Path(config_path).read_text())
    monkeypatch.chdir(tmp_path)
    core_conf.cache_clear()

    road_map = straight_road_map(length=40)
    draw_map = DrawMap.from_config(road_map, ControlMap.new(road_map))
    assert draw_map.settings.lane_thickness == 3.0
    assert draw_map.settings.dash_len == 1.5
    core_conf.cache_clear()
