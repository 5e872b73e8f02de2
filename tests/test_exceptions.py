"""Testes para o sistema de exceções customizadas."""

from contentseeker.common.exceptions import (
    ConfigurationError,
    ContentSeekerError,
    EnumerationError,
    FileOperationError,
    HashError,
    InvalidPatternError,
    ValidationError,
    format_exception_chain,
)


class TestBaseException:
    """Testes para a exceção base."""

    def test_basic_creation(self):
        exc = ContentSeekerError("test error")
        assert str(exc) == "test error"
        assert exc.message == "test error"
        assert exc.details == {}

    def test_with_details(self):
        exc = ContentSeekerError("test error", {"key": "value", "count": 42})
        assert "key=value" in str(exc)
        assert "count=42" in str(exc)

    def test_configuration_family(self):
        assert issubclass(ValidationError, ConfigurationError)
        assert issubclass(InvalidPatternError, ConfigurationError)
        assert issubclass(ConfigurationError, ContentSeekerError)


class TestFileErrors:
    def test_file_operation_error(self):
        exc = FileOperationError("/path/to/file", "failed to process")
        assert exc.path == "/path/to/file"
        assert "path=/path/to/file" in str(exc)

    def test_hash_error(self):
        exc = HashError("/x/a.txt", "SHA256", "Permission denied")
        assert exc.algorithm == "SHA256"
        assert exc.reason == "Permission denied"
        assert "SHA256" in str(exc)
        assert "algorithm=SHA256" in str(exc)
        assert isinstance(exc, FileOperationError)


def test_enumeration_error_keeps_path():
    exc = EnumerationError("/empty", "Nenhum ficheiro encontrado em /empty")
    assert exc.path == "/empty"
    assert not isinstance(exc, ConfigurationError)


def test_format_exception_chain():
    try:
        try:
            raise OSError("disk gone")
        except OSError as inner:
            raise HashError("/x", "MD5", "disk gone") from inner
    except HashError as exc:
        text = format_exception_chain(exc)

    assert "MD5" in text
    assert "OSError: disk gone" in text
    assert " -> " in text


def test_format_exception_chain_with_traceback():
    try:
        raise ValidationError("bad")
    except ValidationError as exc:
        text = format_exception_chain(exc, include_traceback=True)
    assert "Traceback" in text
