"""Tests for dirbench.bench.config — run configuration and candidate specs."""

from __future__ import annotations

import unittest

from dirbench.bench.config import (
    BenchConfig,
    CandidateSpec,
    _coerce_value,
    parse_candidate_spec,
    validate_config,
)


# ---------------------------------------------------------------------------
# BenchConfig
# ---------------------------------------------------------------------------


class TestBenchConfig(unittest.TestCase):
    """Tests for BenchConfig dataclass."""

    def test_config_defaults(self) -> None:
        config = BenchConfig()
        self.assertEqual(config.time_budget_ms, 1000.0)
        self.assertEqual(config.min_samples, 10)
        self.assertIsNone(config.max_samples)
        self.assertEqual(config.warmup_iterations, 1)
        self.assertEqual(config.name, "")

    def test_to_dict(self) -> None:
        config = BenchConfig(name="scan", time_budget_ms=250, max_samples=40)
        d = config.to_dict()
        self.assertEqual(d["name"], "scan")
        self.assertEqual(d["time_budget_ms"], 250)
        self.assertEqual(d["max_samples"], 40)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidateConfig(unittest.TestCase):
    """Tests for validate_config()."""

    def _fields(self, config: BenchConfig, severity: str = "error") -> list[str]:
        return [e.field for e in validate_config(config) if e.severity == severity]

    def test_defaults_are_valid(self) -> None:
        self.assertEqual(validate_config(BenchConfig()), [])

    def test_negative_budget(self) -> None:
        self.assertIn("time_budget_ms", self._fields(BenchConfig(time_budget_ms=-1)))

    def test_zero_budget_is_valid(self) -> None:
        self.assertEqual(self._fields(BenchConfig(time_budget_ms=0)), [])

    def test_min_samples_zero(self) -> None:
        self.assertIn("min_samples", self._fields(BenchConfig(min_samples=0)))

    def test_min_samples_low_is_warning(self) -> None:
        config = BenchConfig(min_samples=2)
        self.assertEqual(self._fields(config), [])
        self.assertEqual(self._fields(config, "warning"), ["min_samples"])

    def test_max_below_min(self) -> None:
        config = BenchConfig(min_samples=10, max_samples=5)
        self.assertIn("max_samples", self._fields(config))

    def test_max_equal_min_is_valid(self) -> None:
        self.assertEqual(validate_config(BenchConfig(min_samples=5, max_samples=5)), [])

    def test_negative_warmup(self) -> None:
        self.assertIn("warmup_iterations", self._fields(BenchConfig(warmup_iterations=-1)))


# ---------------------------------------------------------------------------
# Candidate specs
# ---------------------------------------------------------------------------


class TestParseCandidateSpec(unittest.TestCase):
    """Tests for parse_candidate_spec()."""

    def test_name_and_target(self) -> None:
        spec = parse_candidate_spec("reference=pygount.analysis:analyze")
        self.assertEqual(spec, CandidateSpec(name="reference", target="pygount.analysis:analyze"))

    def test_options(self) -> None:
        spec = parse_candidate_spec("native=linguisto:analyze_directory,offline=true,depth=8")
        self.assertEqual(spec.name, "native")
        self.assertEqual(spec.target, "linguisto:analyze_directory")
        self.assertEqual(spec.options, {"offline": True, "depth": 8})

    def test_whitespace_stripped(self) -> None:
        spec = parse_candidate_spec(" a = mod:fn , mode = fast ")
        self.assertEqual(spec.name, "a")
        self.assertEqual(spec.target, "mod:fn")
        self.assertEqual(spec.options, {"mode": "fast"})

    def test_trailing_comma_ignored(self) -> None:
        self.assertEqual(parse_candidate_spec("a=mod:fn,").options, {})

    def test_missing_equals(self) -> None:
        with self.assertRaises(ValueError):
            parse_candidate_spec("mod:fn")

    def test_empty_name(self) -> None:
        with self.assertRaises(ValueError):
            parse_candidate_spec("=mod:fn")

    def test_bad_target(self) -> None:
        for text in ("a=mod", "a=:fn", "a=mod:"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_candidate_spec(text)

    def test_bad_option_pair(self) -> None:
        with self.assertRaises(ValueError):
            parse_candidate_spec("a=mod:fn,offline")
        with self.assertRaises(ValueError):
            parse_candidate_spec("a=mod:fn,=1")


class TestCoerceValue(unittest.TestCase):
    """Tests for _coerce_value()."""

    def test_booleans(self) -> None:
        self.assertIs(_coerce_value("true"), True)
        self.assertIs(_coerce_value("False"), False)

    def test_numbers(self) -> None:
        self.assertEqual(_coerce_value("12"), 12)
        self.assertEqual(_coerce_value("0.5"), 0.5)

    def test_strings(self) -> None:
        self.assertEqual(_coerce_value("bytes"), "bytes")
        self.assertEqual(_coerce_value(""), "")


if __name__ == "__main__":
    unittest.main()
