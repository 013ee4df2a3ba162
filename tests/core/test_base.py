"""
Tests for Base Classes

Tests PipelineComponent and PandasComponent.
"""

import pandas as pd
import pytest

from credit_risk_bench.core.base import PipelineComponent, PandasComponent


class EchoComponent(PandasComponent):
    """Minimal concrete component."""

    def run(self, value):
        self._start_execution()
        self._end_execution()
        return value


class TestPipelineComponent:
    """Test suite for PipelineComponent."""

    def test_cannot_instantiate_abstract(self):
        """Test the abstract base cannot be created directly."""
        with pytest.raises(TypeError):
            PipelineComponent({})

    def test_default_name(self):
        """Test name defaults to the class name."""
        assert EchoComponent({}).name == "EchoComponent"

    def test_custom_name(self):
        """Test a custom name is kept."""
        assert EchoComponent({}, name="Echo").name == "Echo"

    def test_get_config_dot_notation(self):
        """Test nested keys resolve with dot notation."""
        component = EchoComponent({'params': {'max_leaves': 20}})

        assert component.get_config('params.max_leaves') == 20
        assert component.get_config('params.missing', 'fallback') == 'fallback'

    def test_execution_duration(self):
        """Test duration is measured around run."""
        component = EchoComponent({})
        assert component.execution_duration is None

        component.run(1)

        assert component.execution_duration >= 0


class TestPandasComponent:
    """Test suite for PandasComponent."""

    def test_validate(self):
        assert EchoComponent({}).validate() is True

    def test_check_memory_usage(self):
        """Test memory usage report keys."""
        df = pd.DataFrame({'a': range(10), 'b': list('abcdefghij')})

        usage = EchoComponent({}).check_memory_usage(df)

        assert usage['total_bytes'] > 0
        assert set(usage['per_column']) >= {'a', 'b'}
