"""Tests for the generation service."""

from unittest.mock import patch

import pytest

from xctwine.core.formatting import KeyFormat
from xctwine.core.service import GenerationRequest, generate, preview, validate_paths
from xctwine.exceptions import (
    EmptyCatalogueError,
    InputNotFoundError,
    InvalidEncodingError,
    InvalidInputExtensionError,
    InvalidOutputExtensionError,
    MalformedCatalogueError,
    WriteFailureError,
)
from xctwine.utils.config import Settings


@pytest.fixture
def request_for(tmp_path):
    """Build a request writing Strings.swift next to the catalogue."""

    def _request(input_path, **kwargs):
        return GenerationRequest(
            input_path=input_path,
            output_path=kwargs.pop("output_path", tmp_path / "Strings.swift"),
            **kwargs,
        )

    return _request


class TestGenerate:
    def test_success_writes_file(
        self, write_catalogue, request_for, sample_strings, fixed_date, test_settings
    ):
        request = request_for(write_catalogue(sample_strings))

        result = generate(request, settings=test_settings, generated_on=fixed_date)

        assert result.success is True
        assert result.error is None
        assert result.entry_count == 3
        assert request.output_path.read_text(encoding="utf-8") == result.output
        assert "static let myStringKey: String = \"MY_STRING_KEY\"" in result.output

    def test_hello_world_scenario(self, write_catalogue, request_for, fixed_date, test_settings):
        request = request_for(write_catalogue({"hello_world": {"comment": "Greeting"}}))

        result = generate(request, settings=test_settings, generated_on=fixed_date)

        lines = request.output_path.read_text(encoding="utf-8").splitlines()
        index = lines.index('    static let helloWorld: String = "hello_world"')
        assert result.success
        assert lines[index - 1] == "    /// Greeting"

    def test_namespace_and_format(
        self, write_catalogue, request_for, sample_strings, test_settings
    ):
        request = request_for(
            write_catalogue(sample_strings), key_format=KeyFormat.PASCAL, namespace="L10n"
        )

        result = generate(request, settings=test_settings)

        assert result.success
        assert 'let HelloWorld: String = "hello_world"' in result.output
        assert "static var L10n: XCTwine {" in result.output

    def test_output_is_reproducible(
        self, write_catalogue, request_for, sample_strings, fixed_date, test_settings
    ):
        reversed_strings = dict(reversed(list(sample_strings.items())))
        first = generate(
            request_for(write_catalogue(sample_strings, name="a.xcstrings")),
            settings=test_settings,
            generated_on=fixed_date,
        )
        second = generate(
            request_for(write_catalogue(reversed_strings, name="b.xcstrings")),
            settings=test_settings,
            generated_on=fixed_date,
        )

        assert first.output == second.output

    def test_empty_catalogue_writes_nothing(self, write_catalogue, request_for, test_settings):
        request = request_for(write_catalogue({}))

        result = generate(request, settings=test_settings)

        assert result.success is False
        assert isinstance(result.error, EmptyCatalogueError)
        assert not request.output_path.exists()

    def test_malformed_catalogue(self, write_catalogue, request_for, test_settings):
        request = request_for(write_catalogue(raw='{"version": "1.0"}'))

        result = generate(request, settings=test_settings)

        assert isinstance(result.error, MalformedCatalogueError)
        assert not request.output_path.exists()

    def test_unencodable_output(self, write_catalogue, request_for, test_settings):
        request = request_for(write_catalogue(raw='{"strings": {"bad\\ud800": {}}}'))

        result = generate(request, settings=test_settings)

        assert isinstance(result.error, InvalidEncodingError)
        assert result.entry_count == 1
        assert not request.output_path.exists()

    def test_write_failure(
        self, write_catalogue, request_for, sample_strings, tmp_path, test_settings
    ):
        request = request_for(
            write_catalogue(sample_strings), output_path=tmp_path / "missing" / "Strings.swift"
        )

        result = generate(request, settings=test_settings)

        assert isinstance(result.error, WriteFailureError)

    def test_uses_cached_settings_by_default(self, write_catalogue, request_for, sample_strings):
        request = request_for(write_catalogue(sample_strings))

        settings = Settings(_env_file=None)
        with patch("xctwine.core.service.get_settings", return_value=settings) as mock:
            result = generate(request)

        mock.assert_called_once()
        assert result.success

    def test_result_to_dict(self, write_catalogue, request_for, test_settings):
        request = request_for(write_catalogue({}))

        data = generate(request, settings=test_settings).to_dict()

        assert data["success"] is False
        assert data["entry_count"] == 0
        assert "No localization entries" in data["error"]


class TestPreview:
    def test_does_not_write(self, write_catalogue, request_for, sample_strings, test_settings):
        request = request_for(write_catalogue(sample_strings))

        result = preview(request, settings=test_settings)

        assert result.success
        assert result.output.endswith("}")
        assert not request.output_path.exists()


class TestValidatePaths:
    def test_input_not_found(self, request_for, tmp_path, test_settings):
        with pytest.raises(InputNotFoundError):
            validate_paths(request_for(tmp_path / "missing.xcstrings"), test_settings)

    def test_input_is_directory(self, request_for, tmp_path, test_settings):
        folder = tmp_path / "folder.xcstrings"
        folder.mkdir()

        with pytest.raises(InputNotFoundError):
            validate_paths(request_for(folder), test_settings)

    def test_invalid_input_extension(self, write_catalogue, request_for, test_settings):
        path = write_catalogue({"a": {}}, name="strings.json")

        with pytest.raises(InvalidInputExtensionError) as exc_info:
            validate_paths(request_for(path), test_settings)

        assert exc_info.value.context["expected"] == "xcstrings"

    def test_invalid_output_extension(self, write_catalogue, request_for, tmp_path, test_settings):
        request = request_for(write_catalogue({"a": {}}), output_path=tmp_path / "Strings.txt")

        with pytest.raises(InvalidOutputExtensionError):
            validate_paths(request, test_settings)

    def test_extension_check_is_case_insensitive(
        self, write_catalogue, request_for, tmp_path, test_settings
    ):
        request = request_for(
            write_catalogue({"a": {}}, name="L.XCStrings"), output_path=tmp_path / "S.Swift"
        )

        validate_paths(request, test_settings)

    def test_custom_extensions(self, write_catalogue, request_for, tmp_path):
        settings = Settings(_env_file=None, input_extension=".json", output_extension="kt")
        request = request_for(
            write_catalogue({"a": {}}, name="strings.json"), output_path=tmp_path / "Strings.kt"
        )

        validate_paths(request, settings)

    def test_input_error_reported_in_result(self, request_for, tmp_path, test_settings):
        result = generate(request_for(tmp_path / "missing.xcstrings"), settings=test_settings)

        assert result.success is False
        assert isinstance(result.error, InputNotFoundError)
        assert result.entries == []
