"""Tests for provider configuration resolution."""

import pytest

from nbprovider.sdk.config import (
    UNKNOWN,
    ConfigResolver,
    EnvironmentOverrides,
    RawConfig,
    ResolvedConfig,
)
from nbprovider.sdk.diagnostics import DiagnosticKind, Severity

SERVER = "https://netbox.example.com"
TOKEN = "0123456789abcdef"


def resolve(raw: RawConfig | None = None, **env: str):
    return ConfigResolver(EnvironmentOverrides(env)).resolve(raw or RawConfig())


# ── Presence ────────────────────────────────────────────────────────────


def test_explicit_values_resolve_without_diagnostics() -> None:
    result = resolve(RawConfig(server_url=SERVER, api_token=TOKEN))

    assert result.ok
    assert result.config == ResolvedConfig(server_url=SERVER, api_token=TOKEN)
    assert len(result.diagnostics) == 0


@pytest.mark.parametrize(
    "server_url",
    ["https://netbox.example.com", "http://10.0.0.1:8000/netbox", "netbox.local"],
)
def test_present_values_never_produce_errors(server_url: str) -> None:
    result = resolve(RawConfig(server_url=server_url, api_token=TOKEN))

    assert not result.diagnostics.has_error()
    assert result.config is not None


def test_missing_server_url_reports_config_key_and_env_var() -> None:
    result = resolve(RawConfig(api_token=TOKEN))

    assert result.config is None
    [error] = result.diagnostics.errors
    assert error.field == "server_url"
    assert error.kind is DiagnosticKind.MISSING_REQUIRED_VALUE
    assert error.summary == "Missing NetBox Server URL"
    assert "`server_url`" in error.detail
    assert "NETBOX_SERVER_URL" in error.detail


def test_missing_api_token_reports_config_key_and_env_var() -> None:
    result = resolve(RawConfig(server_url=SERVER))

    assert result.config is None
    [error] = result.diagnostics.errors
    assert error.field == "api_token"
    assert error.kind is DiagnosticKind.MISSING_REQUIRED_VALUE
    assert "`api_token`" in error.detail
    assert "NETBOX_API_TOKEN" in error.detail


def test_all_missing_values_are_reported_together() -> None:
    result = resolve(RawConfig())

    assert result.config is None
    assert result.diagnostics.fields(Severity.ERROR) == {"server_url", "api_token"}


@pytest.mark.parametrize("field", ["server_url", "api_token"])
def test_empty_string_is_treated_as_missing(field: str) -> None:
    values = {"server_url": SERVER, "api_token": TOKEN, field: ""}
    result = resolve(RawConfig(**values))

    diagnostics = result.diagnostics.for_field(field)
    assert len(diagnostics) == 1
    assert diagnostics[0].kind is DiagnosticKind.MISSING_REQUIRED_VALUE


# ── Environment fallback ────────────────────────────────────────────────


def test_null_fields_fall_back_to_environment() -> None:
    result = resolve(
        RawConfig(server_url=None, api_token=None),
        NETBOX_SERVER_URL=SERVER,
        NETBOX_API_TOKEN=TOKEN,
    )

    assert result.config is not None
    assert result.config.server_url == SERVER
    assert result.config.api_token == TOKEN


def test_explicit_value_wins_over_environment() -> None:
    result = resolve(
        RawConfig(server_url="https://explicit.example.com", api_token="explicit-token"),
        NETBOX_SERVER_URL="https://env.example.com",
        NETBOX_API_TOKEN="env-token",
    )

    assert result.config is not None
    assert result.config.server_url == "https://explicit.example.com"
    assert result.config.api_token == "explicit-token"


def test_fields_fall_back_independently() -> None:
    result = resolve(
        RawConfig(server_url=SERVER),
        NETBOX_SERVER_URL="https://env.example.com",
        NETBOX_API_TOKEN=TOKEN,
    )

    assert result.config is not None
    assert result.config.server_url == SERVER
    assert result.config.api_token == TOKEN


def test_explicit_empty_string_does_not_fall_back_to_environment() -> None:
    result = resolve(RawConfig(server_url="", api_token=TOKEN), NETBOX_SERVER_URL=SERVER)

    assert result.config is None
    assert result.diagnostics.fields(Severity.ERROR) == {"server_url"}


def test_empty_environment_value_counts_as_missing() -> None:
    result = resolve(RawConfig(server_url=SERVER), NETBOX_API_TOKEN="")

    assert result.diagnostics.fields(Severity.ERROR) == {"api_token"}


def test_process_environment_is_used_when_no_snapshot_given(monkeypatch) -> None:
    monkeypatch.setenv("NETBOX_SERVER_URL", SERVER)
    monkeypatch.setenv("NETBOX_API_TOKEN", TOKEN)

    result = ConfigResolver().resolve(RawConfig())

    assert result.config is not None
    assert result.config.server_url == SERVER


# ── Trailing slash normalization ────────────────────────────────────────


def test_trailing_slashes_are_stripped_exhaustively_with_one_warning() -> None:
    result = resolve(RawConfig(server_url="https://host///", api_token=TOKEN))

    assert result.config is not None
    assert result.config.server_url == "https://host"
    assert len(result.diagnostics) == 1
    [warning] = result.diagnostics.warnings
    assert warning.kind is DiagnosticKind.NORMALIZATION_WARNING
    assert warning.field == "strip_trailing_slashes_from_url"
    assert "https://host///" in warning.detail
    assert "strip_trailing_slashes_from_url" in warning.detail


def test_clean_url_is_left_alone_without_warning() -> None:
    first = resolve(RawConfig(server_url="https://host///", api_token=TOKEN))
    assert first.config is not None

    second = resolve(RawConfig(server_url=first.config.server_url, api_token=TOKEN))

    assert second.config == first.config
    assert len(second.diagnostics) == 0


def test_stripping_disabled_preserves_slashes_without_warning() -> None:
    result = resolve(
        RawConfig(
            server_url="https://host/netbox//",
            api_token=TOKEN,
            strip_trailing_slashes_from_url=False,
        )
    )

    assert result.config is not None
    assert result.config.server_url == "https://host/netbox//"
    assert result.config.strip_trailing_slashes_from_url is False
    assert len(result.diagnostics) == 0


def test_environment_false_disables_stripping() -> None:
    result = resolve(
        RawConfig(server_url="https://host/", api_token=TOKEN),
        NETBOX_STRIP_TRAILING_SLASHES_FROM_URL="false",
    )

    assert result.config is not None
    assert result.config.server_url == "https://host/"
    assert not result.diagnostics.warnings


@pytest.mark.parametrize("env_value", ["False", "0", "no", "true"])
def test_only_literal_false_disables_stripping(env_value: str) -> None:
    result = resolve(
        RawConfig(server_url="https://host/", api_token=TOKEN),
        NETBOX_STRIP_TRAILING_SLASHES_FROM_URL=env_value,
    )

    assert result.config is not None
    assert result.config.server_url == "https://host"
    assert result.config.strip_trailing_slashes_from_url is True


def test_explicit_strip_flag_wins_over_environment() -> None:
    result = resolve(
        RawConfig(
            server_url="https://host/", api_token=TOKEN, strip_trailing_slashes_from_url=True
        ),
        NETBOX_STRIP_TRAILING_SLASHES_FROM_URL="false",
    )

    assert result.config is not None
    assert result.config.server_url == "https://host"


def test_url_made_only_of_slashes_is_an_error() -> None:
    result = resolve(RawConfig(server_url="///", api_token=TOKEN))

    assert result.config is None
    [error] = result.diagnostics.errors
    assert error.field == "server_url"
    assert error.kind is DiagnosticKind.MALFORMED_URL


def test_warnings_are_kept_alongside_errors() -> None:
    result = resolve(RawConfig(server_url="https://host/"))

    assert result.config is None
    assert [d.field for d in result.diagnostics.errors] == ["api_token"]
    assert [d.kind for d in result.diagnostics.warnings] == [
        DiagnosticKind.NORMALIZATION_WARNING
    ]


# ── Unknown values ──────────────────────────────────────────────────────


def test_unknown_server_url_is_an_error_and_skips_other_checks() -> None:
    result = resolve(RawConfig(server_url=UNKNOWN, api_token=TOKEN), NETBOX_SERVER_URL=SERVER)

    assert result.config is None
    [error] = result.diagnostics.for_field("server_url")
    assert error.kind is DiagnosticKind.UNKNOWN_AT_RESOLUTION_TIME
    assert error.summary == "Unknown NetBox Server URL"
    assert "NETBOX_SERVER_URL" in error.detail


def test_unknown_values_do_not_stop_other_checks() -> None:
    result = resolve(RawConfig(server_url=UNKNOWN, strip_trailing_slashes_from_url=UNKNOWN))

    kinds = {(d.field, d.kind) for d in result.diagnostics}
    assert kinds == {
        ("server_url", DiagnosticKind.UNKNOWN_AT_RESOLUTION_TIME),
        ("strip_trailing_slashes_from_url", DiagnosticKind.UNKNOWN_AT_RESOLUTION_TIME),
        ("api_token", DiagnosticKind.MISSING_REQUIRED_VALUE),
    }


def test_unknown_api_token_is_an_error() -> None:
    result = resolve(RawConfig(server_url=SERVER, api_token=UNKNOWN))

    assert result.config is None
    [error] = result.diagnostics.errors
    assert error.field == "api_token"
    assert error.kind is DiagnosticKind.UNKNOWN_AT_RESOLUTION_TIME


# ── Transport knobs ─────────────────────────────────────────────────────


def test_transport_knob_defaults() -> None:
    result = resolve(RawConfig(server_url=SERVER, api_token=TOKEN))

    assert result.config is not None
    assert result.config.request_timeout == 10.0
    assert result.config.insecure_skip_verify is False
    assert result.config.ca_cert_file is None
    assert result.config.headers == {}


def test_request_timeout_from_environment() -> None:
    result = resolve(RawConfig(server_url=SERVER, api_token=TOKEN), NETBOX_REQUEST_TIMEOUT="2.5")

    assert result.config is not None
    assert result.config.request_timeout == 2.5


@pytest.mark.parametrize("env_value", ["soon", "0", "-1", "nan", "inf"])
def test_invalid_request_timeout_from_environment(env_value: str) -> None:
    result = resolve(
        RawConfig(server_url=SERVER, api_token=TOKEN), NETBOX_REQUEST_TIMEOUT=env_value
    )

    assert result.config is None
    [error] = result.diagnostics.errors
    assert error.field == "request_timeout"
    assert error.kind is DiagnosticKind.INVALID_VALUE
    assert "NETBOX_REQUEST_TIMEOUT" in error.detail


def test_invalid_explicit_request_timeout() -> None:
    result = resolve(RawConfig(server_url=SERVER, api_token=TOKEN, request_timeout=0))

    assert result.config is None
    assert result.diagnostics.fields(Severity.ERROR) == {"request_timeout"}


def test_insecure_skip_verify_from_environment_warns_for_https() -> None:
    result = resolve(RawConfig(server_url=SERVER, api_token=TOKEN), NETBOX_INSECURE_SKIP_VERIFY="TRUE")

    assert result.config is not None
    assert result.config.insecure_skip_verify is True
    [warning] = result.diagnostics.warnings
    assert warning.field == "insecure_skip_verify"
    assert warning.kind is DiagnosticKind.INSECURE_TRANSPORT


def test_insecure_skip_verify_does_not_warn_for_http() -> None:
    result = resolve(
        RawConfig(server_url="http://netbox.local", api_token=TOKEN, insecure_skip_verify=True)
    )

    assert result.config is not None
    assert len(result.diagnostics) == 0


def test_ca_cert_file_from_environment() -> None:
    result = resolve(
        RawConfig(server_url=SERVER, api_token=TOKEN), NETBOX_CA_CERT_FILE="/etc/ssl/netbox.pem"
    )

    assert result.config is not None
    assert result.config.ca_cert_file == "/etc/ssl/netbox.pem"


def test_authorization_header_cannot_be_overridden() -> None:
    result = resolve(
        RawConfig(server_url=SERVER, api_token=TOKEN, headers={"authorization": "Basic abc"})
    )

    assert result.config is None
    [error] = result.diagnostics.errors
    assert error.field == "headers"
    assert error.kind is DiagnosticKind.INVALID_VALUE


def test_custom_headers_are_kept() -> None:
    result = resolve(RawConfig(server_url=SERVER, api_token=TOKEN, headers={"X-Tenant": "ops"}))

    assert result.config is not None
    assert result.config.headers == {"X-Tenant": "ops"}


def test_api_token_is_not_in_repr() -> None:
    result = resolve(RawConfig(server_url=SERVER, api_token=TOKEN))

    assert TOKEN not in repr(result.config)
    assert TOKEN not in repr(RawConfig(api_token=TOKEN))
