"""
Tests for delegate loading and delegate result validation.
"""
from __future__ import annotations

from collections import OrderedDict

import pytest

from s3_resolver.delegate import (
    DelegateDisabledError,
    DelegateLoadError,
    DisabledDelegate,
    load_delegate,
    parse_delegate_result,
)
from s3_resolver.errors import InvalidDelegateResult
from s3_resolver.resolver_types import DelegateAbsent, DelegateKey, DelegateLocation
from s3_resolver.settings import Settings
from tests.helpers import delegates


class TestParseDelegateResult:
    """Raw delegate answers are validated into KeyOrLocation variants."""
    
    def test_none_is_absent(self):
        assert parse_delegate_result(None) == DelegateAbsent()
    
    def test_string_is_key(self):
        assert parse_delegate_result("a/b.jpg") == DelegateKey(key="a/b.jpg")
    
    def test_mapping_is_location(self):
        assert parse_delegate_result({"bucket": "b2", "key": "k2"}) == DelegateLocation(bucket="b2", key="k2")
    
    def test_any_mapping_type_accepted(self):
        result = parse_delegate_result(OrderedDict(bucket="b2", key="k2"))
        assert result == DelegateLocation(bucket="b2", key="k2")
    
    def test_extra_mapping_fields_ignored(self):
        result = parse_delegate_result({"bucket": "b2", "key": "k2", "region": "us-east-1"})
        assert result == DelegateLocation(bucket="b2", key="k2")
    
    def test_numeric_values_coerced(self):
        """Scalar values are stringified, as the bucket/key are plain names."""
        assert parse_delegate_result({"bucket": "b2", "key": 1234}) == DelegateLocation(bucket="b2", key="1234")
    
    @pytest.mark.parametrize("result", [
        {"bucket": "b2"},
        {"key": "k2"},
        {},
        {"bucket": "", "key": "k2"},
        {"bucket": "b2", "key": None},
        {"bucket": ["b2"], "key": "k2"},
    ])
    def test_incomplete_mapping_invalid(self, result):
        with pytest.raises(InvalidDelegateResult, match="bucket and key"):
            parse_delegate_result(result, "cats.jpg")
    
    @pytest.mark.parametrize("result", [42, 4.2, True, ["k"], ("b", "k"), b"key", object()])
    def test_other_shapes_invalid(self, result):
        with pytest.raises(InvalidDelegateResult, match="unsupported type"):
            parse_delegate_result(result, "cats.jpg")
    
    def test_empty_string_invalid(self):
        with pytest.raises(InvalidDelegateResult, match="empty key"):
            parse_delegate_result("", "cats.jpg")


class TestLoadDelegate:
    """Delegate loading from settings."""
    
    def test_disabled_by_default(self):
        delegate = load_delegate(Settings())
        assert isinstance(delegate, DisabledDelegate)
        with pytest.raises(DelegateDisabledError):
            delegate("cats.jpg", {})
    
    def test_enabled_without_target_is_disabled(self):
        assert isinstance(load_delegate(Settings(delegate_enabled=True)), DisabledDelegate)
    
    def test_target_ignored_when_disabled(self):
        settings = Settings(delegate_target="tests.helpers.delegates:get_object_key")
        assert isinstance(load_delegate(settings), DisabledDelegate)
    
    def test_loads_function(self):
        settings = Settings(delegate_enabled=True, delegate_target="tests.helpers.delegates:get_object_key")
        delegate = load_delegate(settings)
        assert delegate is delegates.get_object_key
        assert delegate("x.jpg", {}) == "prefixed/x.jpg"
    
    @pytest.mark.parametrize("target", [
        "tests.helpers.no_such_module:get_object_key",
        "tests.helpers.delegates:no_such_function",
        "tests.helpers.broken_delegate:get_object_key",
        "tests.helpers.delegates:NOT_CALLABLE",
    ])
    def test_load_failure_deferred_to_call(self, target):
        """Loading never raises; the failure surfaces when the delegate is called."""
        delegate = load_delegate(Settings(delegate_enabled=True, delegate_target=target))
        with pytest.raises(DelegateLoadError, match="Cannot load delegate"):
            delegate("x.jpg", {})
