import pytest

from kcheck.errors import (
    DuplicateConfigError,
    EmptySymbolError,
    KernelConfigParseError,
    UnknownKernelConfigOptionError,
)
from kcheck.kconfig import KconfigState
from kcheck.kernel import KernelConfig
from kcheck.kernel.scanner import lookup, render_option


def test_lookup_tristate_and_not_set():
    lines = ["CONFIG_A=y", "CONFIG_B=m", "CONFIG_C=n", "# CONFIG_D is not set"]
    assert lookup(lines, "CONFIG_A") == KconfigState.ON
    assert lookup(lines, "CONFIG_B") == KconfigState.MODULE
    assert lookup(lines, "CONFIG_C") == KconfigState.OFF
    assert lookup(lines, "CONFIG_D") == KconfigState.NOT_SET


def test_lookup_ignores_names_extended_with_underscore():
    lines = ["CONFIG_FOO=y", "CONFIG_FOO_BAR=n"]
    assert lookup(lines, "CONFIG_FOO") == KconfigState.ON
    assert lookup(lines, "CONFIG_FOO_BAR") == KconfigState.OFF


def test_lookup_matches_longer_name_without_underscore():
    assert lookup(["CONFIG_FOOD=y"], "CONFIG_FOO") == KconfigState.ON


def test_lookup_duplicate_lines():
    with pytest.raises(DuplicateConfigError) as excinfo:
        lookup(["CONFIG_TEST=y", "CONFIG_TEST=y"], "CONFIG_TEST")
    assert excinfo.value.symbol == "CONFIG_TEST"


def test_lookup_comment_and_assignment_are_duplicates():
    with pytest.raises(DuplicateConfigError):
        lookup(["# CONFIG_TEST is not set", "CONFIG_TEST=y"], "CONFIG_TEST")


def test_duplicate_wins_over_malformed_lines():
    with pytest.raises(DuplicateConfigError):
        lookup(["CONFIG_TEST=q", "# CONFIG_TEST something"], "CONFIG_TEST")


def test_lookup_not_found():
    assert lookup(["CONFIG_A=y", "CONFIG_B=n"], "CONFIG_C") == KconfigState.NOT_FOUND
    assert lookup([], "CONFIG_C") == KconfigState.NOT_FOUND


def test_lookup_unknown_value():
    with pytest.raises(UnknownKernelConfigOptionError) as excinfo:
        lookup(["CONFIG_X=q"], "CONFIG_X")
    assert excinfo.value.value == "q"


@pytest.mark.parametrize("line", ["# CONFIG_X=y", "CONFIG_X", "# CONFIG_X"])
def test_lookup_unparseable_line(line):
    with pytest.raises(KernelConfigParseError):
        lookup([line], "CONFIG_X")


def test_lookup_values_and_strings():
    lines = [
        "CONFIG_HZ=250",
        "CONFIG_PHYSICAL_START=0x1000000",
        'CONFIG_CMDLINE="console=ttyS0 quiet"',
        'CONFIG_LOCALVERSION=""',
        "CONFIG_SPACED = y",
    ]
    assert lookup(lines, "CONFIG_HZ") == KconfigState.number(250)
    assert lookup(lines, "CONFIG_PHYSICAL_START") == KconfigState.number(0x1000000)
    assert lookup(lines, "CONFIG_CMDLINE") == KconfigState.text("console=ttyS0 quiet")
    assert lookup(lines, "CONFIG_LOCALVERSION") == KconfigState.text("")
    assert lookup(lines, "CONFIG_SPACED") == KconfigState.ON


def test_lookup_negative_number_is_unknown():
    with pytest.raises(UnknownKernelConfigOptionError):
        lookup(["CONFIG_X=-1"], "CONFIG_X")


def test_lookup_rejects_empty_symbol():
    with pytest.raises(EmptySymbolError):
        lookup(["CONFIG_A=y"], "")


@pytest.mark.parametrize(
    "state",
    [
        KconfigState.ON,
        KconfigState.MODULE,
        KconfigState.OFF,
        KconfigState.NOT_SET,
        KconfigState.text('say "hi" \\ bye'),
        KconfigState.text("line one\nline two\r\n"),
        KconfigState.number(2**64 - 1),
    ],
    ids=repr,
)
def test_rendered_line_reads_back(state):
    line = render_option("CONFIG_RT", state)
    assert lookup([line], "CONFIG_RT") == state


def test_render_option_lines():
    assert render_option("CONFIG_X", KconfigState.NOT_FOUND) is None
    assert render_option("CONFIG_X", KconfigState.NOT_SET) == "# CONFIG_X is not set"
    assert render_option("CONFIG_X", KconfigState.DISABLED) == "CONFIG_X=n"
    assert render_option("CONFIG_X", KconfigState.ENABLED) == "CONFIG_X=y"
    assert render_option("CONFIG_X", KconfigState.number(42)) == "CONFIG_X=42"
    assert render_option("CONFIG_X", KconfigState.text("ab")) == 'CONFIG_X="ab"'


def test_text_with_line_breaks_survives_reparsing():
    line = render_option("CONFIG_CMDLINE", KconfigState.text("quiet\nsplash"))
    assert line == 'CONFIG_CMDLINE="quiet\\nsplash"'
    kernel = KernelConfig.from_text(f"CONFIG_A=y\n{line}\n")
    assert kernel.option("CONFIG_CMDLINE") == KconfigState.text("quiet\nsplash")
