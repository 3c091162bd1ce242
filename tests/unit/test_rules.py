"""Tests for tax rules loading, validation and state lookups.

Custom rules files are written to tmp_path and selected with
FREELANCE_TAX_RULES_DIR so the shipped tables are never touched.
"""

import pytest
import yaml
from pydantic import ValidationError

from freelancetax.sdk.taxes import (
    DEFAULT_TAX_YEAR,
    FilingStatus,
    TaxBracket,
    TaxRules,
    TaxRulesNotFoundError,
    check_bracket_table,
    clear_rules_cache,
    get_available_years,
    get_state,
    load_tax_rules,
    lookup_state_rate,
)


def bracket_table(*uppers, rates=None):
    """Build a contiguous table from upper bounds; last bracket unbounded."""
    rates = rates or [0.10 + 0.02 * i for i in range(len(uppers) + 1)]
    table = []
    lower = 0
    for upper, rate in zip(list(uppers) + [None], rates):
        table.append({"lower_bound": lower, "upper_bound": upper, "rate": rate})
        if upper is not None:
            lower = upper + 1
    return table


def rules_data(year=2030, **overrides):
    data = {
        "year": year,
        "brackets": {s.value: bracket_table(10000, 40000) for s in FilingStatus},
        "states": [{"code": "AA", "name": "Alpha", "rate": 0.05}],
    }
    data.update(overrides)
    return data


@pytest.fixture
def rules_dir(tmp_path, monkeypatch):
    """Isolated tax_rules directory."""
    directory = tmp_path / "tax_rules"
    directory.mkdir()
    monkeypatch.setenv("FREELANCE_TAX_RULES_DIR", str(directory))
    clear_rules_cache()
    yield directory
    clear_rules_cache()


def write_rules(directory, year, data):
    (directory / f"{year}.yaml").write_text(yaml.dump(data))


# === SHIPPED 2025 TABLES ===


class TestShippedRules:

    def test_default_year_loads(self):
        rules = load_tax_rules()
        assert rules.year == DEFAULT_TAX_YEAR == 2025

    def test_year_as_string(self):
        assert load_tax_rules("2025") is load_tax_rules(2025)

    def test_every_status_has_seven_brackets(self):
        rules = load_tax_rules(2025)
        for status in FilingStatus:
            assert len(rules.brackets_for(status)) == 7

    @pytest.mark.parametrize("status", list(FilingStatus))
    def test_tables_are_contiguous(self, status):
        table = load_tax_rules(2025).brackets_for(status)
        assert table[0].lower_bound == 0
        assert table[-1].upper_bound is None
        for previous, current in zip(table, table[1:]):
            assert current.lower_bound == previous.upper_bound + 1

    def test_top_rate(self):
        rules = load_tax_rules(2025)
        assert rules.brackets_for(FilingStatus.MARRIED_JOINTLY)[-1].lower_bound == 1252701
        assert rules.brackets_for(FilingStatus.MARRIED_JOINTLY)[-1].rate == 0.37

    def test_ten_states(self):
        rules = load_tax_rules(2025)
        assert [s.code for s in rules.states] == [
            "CA", "NY", "TX", "FL", "WA", "IL", "PA", "OH", "GA", "NC",
        ]

    def test_self_employment_constants(self):
        se = load_tax_rules(2025).self_employment
        assert (se.taxable_fraction, se.tax_rate, se.deductible_fraction) == (0.9235, 0.153, 0.5)

    def test_available_years(self):
        assert 2025 in get_available_years()


# === STATE LOOKUP ===


class TestStateLookup:

    def test_known_state(self):
        rules = load_tax_rules(2025)
        assert lookup_state_rate("CA", rules) == 0.093
        assert lookup_state_rate("NY", rules) == 0.0685
        assert get_state("PA", rules).name == "Pennsylvania"

    def test_zero_rate_state(self):
        assert lookup_state_rate("TX", load_tax_rules(2025)) == 0

    def test_unknown_state_defaults_to_zero(self):
        rules = load_tax_rules(2025)
        assert lookup_state_rate("ZZ", rules) == 0
        assert lookup_state_rate("", rules) == 0
        assert get_state("ZZ", rules) is None

    def test_lookup_is_exact_match(self):
        assert lookup_state_rate("ca", load_tax_rules(2025)) == 0

    def test_large_state_table(self, rules_dir):
        states = [{"code": f"S{i}", "name": f"State {i}", "rate": i / 10000} for i in range(500)]
        write_rules(rules_dir, 2030, rules_data(states=states))

        rules = load_tax_rules(2030)
        assert lookup_state_rate("S499", rules) == 0.0499
        assert lookup_state_rate("S500", rules) == 0


# === LOADING ===


class TestLoading:

    def test_custom_year(self, rules_dir):
        write_rules(rules_dir, 2030, rules_data())
        rules = load_tax_rules(2030)
        assert rules.year == 2030
        assert get_available_years() == [2030]

    def test_year_defaults_from_filename(self, rules_dir):
        data = rules_data()
        del data["year"]
        write_rules(rules_dir, 2031, data)
        assert load_tax_rules(2031).year == 2031

    def test_self_employment_defaults(self, rules_dir):
        write_rules(rules_dir, 2030, rules_data())
        assert load_tax_rules(2030).self_employment.tax_rate == 0.153

    def test_missing_year(self, rules_dir):
        with pytest.raises(TaxRulesNotFoundError, match="1999"):
            load_tax_rules(1999)

    def test_missing_year_is_file_not_found(self, rules_dir):
        with pytest.raises(FileNotFoundError):
            load_tax_rules(1999)

    def test_invalid_year(self):
        with pytest.raises(TaxRulesNotFoundError):
            load_tax_rules("../secrets")

    def test_missing_status_table(self, rules_dir):
        data = rules_data()
        del data["brackets"]["head-of-household"]
        write_rules(rules_dir, 2030, data)
        with pytest.raises(ValidationError, match="head-of-household"):
            load_tax_rules(2030)

    def test_unknown_field_rejected(self, rules_dir):
        write_rules(rules_dir, 2030, rules_data(standard_deduction=15000))
        with pytest.raises(ValidationError):
            load_tax_rules(2030)

    def test_duplicate_state_codes(self, rules_dir):
        states = [{"code": "AA", "name": "A", "rate": 0.01}, {"code": "AA", "name": "B", "rate": 0.02}]
        write_rules(rules_dir, 2030, rules_data(states=states))
        with pytest.raises(ValidationError, match="duplicate"):
            load_tax_rules(2030)

    def test_rules_are_frozen(self):
        rules = load_tax_rules(2025)
        with pytest.raises(ValidationError):
            rules.year = 2026


# === BRACKET TABLE VALIDATION ===


class TestBracketTableValidation:

    def brackets(self, rows):
        return [TaxBracket(**row) for row in rows]

    def test_valid_table(self):
        table = self.brackets(bracket_table(100, 200))
        assert check_bracket_table(table) == table

    def test_empty(self):
        with pytest.raises(ValueError, match="empty"):
            check_bracket_table([])

    def test_must_start_at_zero(self):
        rows = bracket_table(100)
        rows[0]["lower_bound"] = 1
        with pytest.raises(ValueError, match="start at 0"):
            check_bracket_table(self.brackets(rows))

    def test_gap(self):
        rows = bracket_table(100, 200)
        rows[1]["lower_bound"] = 105
        with pytest.raises(ValueError, match="does not follow"):
            check_bracket_table(self.brackets(rows))

    def test_overlap(self):
        rows = bracket_table(100, 200)
        rows[1]["lower_bound"] = 100
        with pytest.raises(ValueError, match="does not follow"):
            check_bracket_table(self.brackets(rows))

    def test_last_must_be_unbounded(self):
        rows = bracket_table(100)
        rows[-1]["upper_bound"] = 500
        with pytest.raises(ValueError, match="unbounded"):
            check_bracket_table(self.brackets(rows))

    def test_unbounded_in_middle(self):
        rows = [
            {"lower_bound": 0, "upper_bound": None, "rate": 0.1},
            {"lower_bound": 101, "upper_bound": None, "rate": 0.2},
        ]
        with pytest.raises(ValueError, match="only the last"):
            check_bracket_table(self.brackets(rows))

    def test_rate_out_of_range(self):
        with pytest.raises(ValidationError):
            TaxBracket(lower_bound=0, upper_bound=None, rate=1.5)

    def test_upper_below_lower(self):
        with pytest.raises(ValidationError):
            TaxBracket(lower_bound=500, upper_bound=100, rate=0.1)

    def test_rules_model_reports_status(self):
        data = rules_data()
        data["brackets"]["single"][1]["lower_bound"] = 20000
        with pytest.raises(ValidationError, match="single"):
            TaxRules.model_validate(data)
