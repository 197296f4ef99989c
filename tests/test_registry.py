import os

import pytest

from ignition.registry import (
    add_component_to_module_path,
    component_accessor_names,
    component_imports,
    component_module_path,
    components_from_file,
    components_locked,
    current_crate,
    engine_path,
    find_components,
    format_components,
    module_path,
    parse_components,
    read_components,
    replace_components_in_file,
    scan_dir_for_components,
    search_and_rescue_components,
    tempfile_path,
    time_of_last_update,
    to_snake_case,
    update_components,
    write_component_file,
)

LIB_SOURCE = "#[derive(Component, Debug)]\npub struct Int(pub i32);\n\nengine!();\n"


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    src = tmp_path / "src"
    (src / "life").mkdir(parents=True)
    (src / "macros").mkdir()
    (src / "lib.rs").write_text(LIB_SOURCE)
    (src / "life" / "body.rs").write_text(
        "#[derive(Component)]\npub struct Velocity {\n    x: f32,\n}\n"
    )
    (src / "macros" / "hidden.rs").write_text(
        "#[derive(Component)]\npub struct Hidden(u8);\n"
    )
    return tmp_path


def test_add_component_to_module_path():
    assert (
        add_component_to_module_path("ignition::life::genesis", "Name")
        == "ignition::life::genesis::{Name, NameTrait}"
    )


@pytest.mark.parametrize(
    "path, crate, expected",
    [
        ("./src/life/genesis.rs", "ignition", "ignition::life::genesis"),
        ("./src/lib.rs", "ignition", "ignition"),
        ("./src/main.rs", "application", "application"),
    ],
)
def test_module_path(path, crate, expected):
    assert module_path(path, crate) == expected


def test_component_module_path():
    assert component_module_path("./src/lib.rs", "Int", "ignition") == "ignition::{Int, IntTrait}"


def test_current_crate_is_last_directory(tmp_path):
    directory = tmp_path / "ignition"
    directory.mkdir()
    assert current_crate(directory) == "ignition"


def test_tempfile_path_lives_in_temp_dir():
    path = tempfile_path()
    assert path.name == "components.toml"


def test_read_components_prefers_primary_then_fallback(tmp_path):
    primary = tmp_path / "primary.toml"
    fallback = tmp_path / "fallback.toml"
    fallback.write_text("from fallback")
    assert read_components(primary, fallback) == "from fallback"
    primary.write_text("from primary")
    assert read_components(primary, fallback) == "from primary"
    assert read_components(tmp_path / "a", tmp_path / "b") == ""


def test_format_components_layout():
    text = format_components([("Int", "'ignition::{Int, IntTrait}'")], "ignition", 100)
    assert text == "[[ignition.100]]\nInt = 'ignition::{Int, IntTrait}'\n"


def test_time_of_last_update_round_trip():
    text = format_components([("Int", "'x'")], "ignition", 1234)
    assert time_of_last_update(text, "ignition") == 1234
    assert time_of_last_update(text, "other") == 0
    assert time_of_last_update("", "ignition") == 0


def test_parse_components_skips_unquoted_entries():
    components = [("engine", "ignition"), ("Int", "'ignition::{Int, IntTrait}'")]
    text = format_components(components, "ignition", 5)
    assert parse_components(text) == [("Int", "ignition::{Int, IntTrait}")]


def test_engine_path():
    text = format_components([("engine", "ignition")], "ignition", 5)
    assert engine_path(text, "ignition") == "ignition"
    assert engine_path("Int = 'ignition::{Int, IntTrait}'\n", "ignition") == ""


def test_replace_components_in_empty_file_returns_formatted():
    formatted = format_components([("Int", "'a'")], "ignition", 1)
    assert replace_components_in_file("", formatted, "ignition") == formatted


def test_replace_components_replaces_own_section():
    old = format_components([("Int", "'a'")], "ignition", 1)
    new = format_components([("Float", "'b'")], "ignition", 2)
    result = replace_components_in_file(old, new, "ignition")
    assert result == new


def test_replace_components_appends_for_other_crate():
    old = format_components([("Int", "'a'")], "other", 1)
    new = format_components([("Float", "'b'")], "ignition", 2)
    result = replace_components_in_file(old, new, "ignition")
    assert result == old + "\n" + new
    assert time_of_last_update(result, "other") == 1
    assert time_of_last_update(result, "ignition") == 2


def test_to_snake_case():
    assert to_snake_case("Int") == "int"
    assert to_snake_case("RigidBody") == "rigid_body"
    assert to_snake_case("HTTPServer") == "http_server"


@pytest.mark.parametrize("name", ["Int", "RigidBody", "HTTPServer", "Vec3D"])
def test_to_snake_case_is_idempotent_and_lower(name):
    snake = to_snake_case(name)
    assert snake == snake.lower()
    assert to_snake_case(snake) == snake


def test_component_accessor_names():
    names = component_accessor_names("RigidBody")
    assert names.trait == "RigidBodyTrait"
    assert names.getter == to_snake_case("RigidBody")
    assert names.getter_mut == names.getter + "_mut"


def test_components_from_file(project):
    found = components_from_file("./src/lib.rs", "ignition")
    assert found == [("engine", "ignition"), ("Int", "'ignition::{Int, IntTrait}'")]


def test_scan_skips_macros_directory(project):
    found = scan_dir_for_components(os.path.join(".", "src"), "ignition")
    names = [name for name, _path in found]
    assert "Hidden" not in names
    assert ("Velocity", "'ignition::life::body::{Velocity, VelocityTrait}'") in found
    assert find_components(os.path.join(".", "src"), "ignition") == found


def test_component_imports_leave_out_engine_module():
    components = [
        ("Int", "ignition::{Int, IntTrait}"),
        ("Velocity", "ignition::life::body::{Velocity, VelocityTrait}"),
    ]
    text = "engine = ignition\n"
    assert component_imports(components, text, "ignition") == [
        "use crate::life::body::{Velocity, VelocityTrait};"
    ]


def test_components_locked(tmp_path):
    lock = tmp_path / "components.lock"
    assert components_locked(lock) is False
    assert lock.exists()
    assert components_locked(lock) is True


def test_write_component_file(tmp_path):
    path = tmp_path / "components.toml"
    backup = tmp_path / "backup.toml"
    write_component_file("content", path, backup)
    assert path.read_text() == "content"
    assert backup.read_text() == "content"


def test_search_and_rescue_skips_fresh_registry(project):
    registry = project / "components.toml"
    registry.write_text(format_components([], "ignition", 100))
    result = search_and_rescue_components(
        "./src", registry, project / "backup.toml", "ignition", 101
    )
    assert result is None
    assert time_of_last_update(registry.read_text(), "ignition") == 100


def test_search_and_rescue_rewrites_registry(project):
    registry = project / "components.toml"
    backup = project / "backup.toml"
    result = search_and_rescue_components("./src", registry, backup, "ignition", 500)
    assert ("Int", "'ignition::{Int, IntTrait}'") in result
    assert all(name != "engine" for name, _path in result)
    text = registry.read_text()
    assert time_of_last_update(text, "ignition") == 500
    assert engine_path(text, "ignition") == "ignition"
    assert backup.read_text() == text
    assert [name for name, _path in parse_components(text)] == [name for name, _path in result]


def test_update_components_releases_lock(project):
    lock = project / "components.lock"
    result = update_components(
        "./src", project / "components.toml", project / "backup.toml", lock, "ignition", 500
    )
    assert ("Int", "'ignition::{Int, IntTrait}'") in result
    assert not lock.exists()


def test_update_components_when_locked(project):
    lock = project / "components.lock"
    lock.write_text("")
    result = update_components(
        "./src", project / "components.toml", project / "backup.toml", lock, "ignition", 500
    )
    assert result is None
    assert lock.exists()
    assert not (project / "components.toml").exists()