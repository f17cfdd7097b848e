import pytest
import requests

from goalcalc.ai import llm_client


def test_extract_text_reads_first_message():
    response = {"choices": [{"message": {"role": "assistant", "content": "  Invista todo mês.\n"}}]}
    assert llm_client.extract_text(response) == "Invista todo mês."


def test_extract_text_without_content():
    assert llm_client.extract_text({"choices": []}) == ""
    assert llm_client.extract_text({}) == ""
    assert llm_client.extract_text({"choices": [{"message": {"content": None}}]}) == ""


def test_query_without_key_raises(monkeypatch):
    monkeypatch.setattr(llm_client, "LLM_API_KEY", None)
    with pytest.raises(RuntimeError):
        llm_client.query_llm("Dê 3 dicas.")


def test_check_online_hits_model_listing(monkeypatch):
    calls = []

    class FakeResponse:
        status_code = 401

    def fake_get(url, timeout, headers):
        calls.append(url)
        return FakeResponse()

    monkeypatch.setattr(llm_client.requests, "get", fake_get)
    assert llm_client.check_llm_online() is True
    assert calls == [f"{llm_client.LLM_BASE_URL}/models"]


def test_check_online_when_unreachable(monkeypatch):
    def failing_get(url, timeout, headers):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(llm_client.requests, "get", failing_get)
    assert llm_client.check_llm_online(timeout=0.1) is False
