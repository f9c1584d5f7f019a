"""Tests for etherscan_sdk/core/interceptors.py."""

from __future__ import annotations

from etherscan_sdk.core.interceptors import InterceptorChain


def test_request_interceptors_run_in_order() -> None:
    chain = InterceptorChain()
    chain.add_request_interceptor(lambda p: {**p, "order": p.get("order", "") + "a"})
    chain.add_request_interceptor(lambda p: {**p, "order": p["order"] + "b"})
    assert chain.apply_request({})["order"] == "ab"


def test_apply_request_does_not_mutate_input() -> None:
    chain = InterceptorChain()

    def add_tag(params: dict) -> dict:
        params["tag"] = "latest"
        return params

    chain.add_request_interceptor(add_tag)
    original = {"module": "account"}
    result = chain.apply_request(original)
    assert result == {"module": "account", "tag": "latest"}
    assert original == {"module": "account"}


def test_response_interceptors_transform_value() -> None:
    chain = InterceptorChain()
    chain.add_response_interceptor(lambda v: v * 2)
    chain.add_response_interceptor(lambda v: v + 1)
    assert chain.apply_response(10) == 21


def test_clear_removes_everything() -> None:
    chain = InterceptorChain()
    chain.add_request_interceptor(lambda p: p)
    chain.add_response_interceptor(lambda v: v)
    assert len(chain) == 2
    chain.clear()
    assert len(chain) == 0
    assert chain.apply_response("x") == "x"
