import hashlib
import platform

import pytest

from hashbench.consts.ImplementationRole import ImplementationRole
from hashbench.errors import ConfigError, ImplementationUnavailableError
from hashbench.models.implementation_spec import ImplementationSpec
from hashbench.service.implementations import load_implementation, runtime_description


def spec(target, role=ImplementationRole.CANDIDATE, extension_path=None, name="impl"):
    return ImplementationSpec(name=name, target=target, role=role, extension_path=extension_path)


def test_loads_stdlib_callable():
    loaded = load_implementation(spec("hashlib:md5", ImplementationRole.REFERENCE, name="hashlib md5()"))
    assert loaded.fn is hashlib.md5
    assert loaded.name == "hashlib md5()"
    assert loaded.describe().startswith("hashlib")


def test_loads_module_from_extension_path(working_extension):
    loaded = load_implementation(spec("working_hash_ext:md5", extension_path=str(working_extension)))
    assert loaded.fn(b"abc") == hashlib.md5(b"abc").hexdigest()
    assert "v1.2.3" in loaded.describe()
    assert str(working_extension) in loaded.describe()


def test_missing_candidate_module_suggests_extension():
    with pytest.raises(ImplementationUnavailableError) as excinfo:
        load_implementation(spec("definitely_missing_hash_ext:md5", name="native md5"))
    message = str(excinfo.value)
    assert "native md5" in message
    assert "definitely_missing_hash_ext" in message
    assert "--extension" in message


def test_missing_extension_file(tmp_path):
    with pytest.raises(ImplementationUnavailableError) as excinfo:
        load_implementation(spec("qzoke:md5", extension_path=str(tmp_path / "libqzoke.so")))
    assert "extension file not found" in str(excinfo.value)


def test_missing_attribute():
    with pytest.raises(ImplementationUnavailableError) as excinfo:
        load_implementation(spec("hashlib:md6"))
    assert "no attribute 'md6'" in str(excinfo.value)


def test_dotted_attribute_path():
    loaded = load_implementation(spec("hashlib:md5.__call__"))
    assert loaded.fn(b"x").hexdigest() == hashlib.md5(b"x").hexdigest()


def test_non_callable_attribute():
    with pytest.raises(ImplementationUnavailableError):
        load_implementation(spec("hashlib:algorithms_guaranteed"))


@pytest.mark.parametrize("target", ["hashlib", "hashlib:", ":md5"])
def test_malformed_target(target):
    with pytest.raises(ConfigError):
        load_implementation(spec(target))


def test_runtime_description_names_python():
    assert runtime_description().endswith(platform.python_version())


def test_unloadable_extension_file(tmp_path):
    broken = tmp_path / "libqzoke.so"
    broken.write_bytes(b"\x7fELF truncated")
    with pytest.raises(ImplementationUnavailableError) as excinfo:
        load_implementation(spec("qzoke:md5", extension_path=str(broken), name="qzoke md5()"))
    assert "qzoke md5()" in str(excinfo.value)
    assert "--extension" in excinfo.value.remediation
