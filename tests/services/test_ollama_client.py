"""Tests for the blocking client's unary operations."""

import io
import json

import httpx
import pytest

from ollama_api import (
    CompletionRequest,
    EmbeddingRequest,
    OllamaClient,
    OllamaRequestError,
    OllamaSettings,
    PreconditionError,
)

BASE_URL = "http://ollama.test:11434"

GENERATE_BODY = {
    "model": "llama2",
    "created_at": "2023-08-04T19:22:45.499127Z",
    "response": "Because of Rayleigh scattering.",
    "done": True,
    "context": [1, 2, 3],
    "total_duration": 5589157167,
    "load_duration": 3013701500,
    "prompt_eval_count": 46,
    "prompt_eval_duration": 1160282000,
    "eval_count": 13,
    "eval_duration": 1325948000,
}


def body_of(request: httpx.Request):
    return json.loads(request.content)


class TestConstruction:

    def test_no_network_on_construction(self, make_client, requests_seen):
        make_client(lambda request: httpx.Response(200))
        assert requests_seen == []

    def test_default_base_url(self):
        client = OllamaClient(settings=OllamaSettings(_env_file=None, BASE_URL="http://localhost:11434"))
        try:
            assert client.base_url == "http://localhost:11434"
        finally:
            client.close()

    def test_trailing_slash_stripped(self, requests_seen):
        http_client = httpx.Client(transport=httpx.MockTransport(
            lambda request: requests_seen.append(request) or httpx.Response(200, json={"models": []})))
        client = OllamaClient(base_url="http://ollama.test:11434/", http_client=http_client)

        client.list_models()
        assert str(requests_seen[0].url) == "http://ollama.test:11434/api/tags"

    def test_close_only_owned_client(self):
        injected = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        with OllamaClient(base_url=BASE_URL, http_client=injected):
            pass
        assert not injected.is_closed

        owned = OllamaClient(base_url=BASE_URL)
        owned.close()
        assert owned.http_client.is_closed


class TestGenerate:

    def test_generate(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json=GENERATE_BODY))

        response = client.generate(CompletionRequest(model="llama2", prompt="Why is the sky blue?", stream=False))

        request = requests_seen[0]
        assert request.method == "POST"
        assert request.url.path == "/api/generate"
        assert body_of(request) == {"model": "llama2", "prompt": "Why is the sky blue?", "stream": False}
        assert response.response == "Because of Rayleigh scattering."
        assert response.context == [1, 2, 3]
        assert response.eval_count == 13

    def test_generate_rejects_stream_request(self, make_client, requests_seen):
        """Test generate refuses stream=True without touching the network."""
        client = make_client(lambda request: httpx.Response(200, json=GENERATE_BODY))

        with pytest.raises(PreconditionError):
            client.generate(CompletionRequest(model="llama2", prompt="hi", stream=True))
        with pytest.raises(PreconditionError):
            client.generate(None)
        assert requests_seen == []

    def test_generate_server_error(self, make_client):
        client = make_client(lambda request: httpx.Response(
            404, text='{"error":"model \'nope\' not found, try pulling it first"}'))

        with pytest.raises(OllamaRequestError) as excinfo:
            client.generate(CompletionRequest(model="nope", prompt="hi", stream=False))

        assert excinfo.value.status_code == 404
        assert excinfo.value.status_text == "Not Found"
        assert "try pulling it first" in excinfo.value.body

    def test_transport_error_propagates(self, make_client):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        client = make_client(refuse)
        with pytest.raises(httpx.ConnectError):
            client.generate(CompletionRequest(model="llama2", prompt="hi", stream=False))


class TestEmbeddingAndModels:

    def test_embedding(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json={"embedding": [0.5, -0.25, 1.0]}))

        response = client.embedding(EmbeddingRequest(model="llama2", prompt="Hello World"))

        assert requests_seen[0].url.path == "/api/embeddings"
        assert body_of(requests_seen[0]) == {"model": "llama2", "prompt": "Hello World"}
        assert response.embedding == [0.5, -0.25, 1.0]

    def test_create_model(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json={"status": "success"}))

        response = client.create_model("mario", "FROM llama2\nSYSTEM You are Mario.")

        assert requests_seen[0].url.path == "/api/create"
        assert body_of(requests_seen[0]) == {
            "name": "mario",
            "modelfile": "FROM llama2\nSYSTEM You are Mario.",
            "stream": False,
        }
        assert response.status == "success"

    @pytest.mark.parametrize("name, modelfile", [("", "FROM llama2"), ("mario", ""), (None, "FROM llama2")])
    def test_create_model_requires_text(self, make_client, requests_seen, name, modelfile):
        client = make_client(lambda request: httpx.Response(200, json={"status": "success"}))
        with pytest.raises(PreconditionError):
            client.create_model(name, modelfile)
        assert requests_seen == []

    def test_list_models(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json={"models": [
            {"name": "llama2:latest", "modified_at": "2023-11-04T14:56:49.277302-07:00",
             "size": 3825819519, "digest": "fe938a131f40e6f6d40083c9f0f430a515233eb2edaa6d72eb85c50d64f2300e"},
            {"name": "orca-mini:latest", "modified_at": "2023-11-04T14:56:49.277302-07:00",
             "size": 1928429856, "digest": "2dfb4a5e0a3f6b2c8e3c7b3b3b3b3b3b3b3b3b3b3b3b3b3b3b3b3b3b3b3b3b3b"},
        ]}))

        models = client.list_models()

        assert requests_seen[0].method == "GET"
        assert requests_seen[0].url.path == "/api/tags"
        assert [model.name for model in models] == ["llama2:latest", "orca-mini:latest"]
        assert models[0].size == 3825819519

    @pytest.mark.parametrize("content", [b"", b"null", b" null\n", b"{}", b'{"models": null}', b'{"models": []}'])
    def test_list_models_empty(self, make_client, content):
        """Test an absent or null model list yields an empty list."""
        client = make_client(lambda request: httpx.Response(200, content=content))
        assert client.list_models() == []

    def test_list_models_server_error(self, make_client):
        client = make_client(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(OllamaRequestError):
            client.list_models()

    def test_show_model(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json={
            "license": "LLAMA 2 COMMUNITY LICENSE AGREEMENT",
            "modelfile": "FROM llama2",
            "parameters": "stop [INST]",
            "template": "[INST] {{ .Prompt }} [/INST]",
            "details": {"format": "gguf"},
        }))

        response = client.show_model("llama2")

        assert requests_seen[0].url.path == "/api/show"
        assert body_of(requests_seen[0]) == {"name": "llama2"}
        assert response.parameters == "stop [INST]"
        assert response.system is None


class TestBlobs:

    DIGEST = "sha256:29fdb92e57cf0827ded04ae6461b5931d01fa595843f55d36f5b275a52087dd2"

    @pytest.mark.parametrize("status, expected", [(200, True), (204, True), (404, False), (500, False)])
    def test_is_blob_exists(self, make_client, requests_seen, status, expected):
        """Test only 2xx means the blob exists and nothing raises."""
        client = make_client(lambda request: httpx.Response(status))

        assert client.is_blob_exists(self.DIGEST) is expected
        assert requests_seen[0].method == "HEAD"
        assert requests_seen[0].url.path == f"/api/blobs/{self.DIGEST}"

    def test_create_blob_multipart(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(201))

        assert client.create_blob(self.DIGEST, b"GGUF-weights") is True

        request = requests_seen[0]
        assert request.method == "POST"
        assert request.url.path == f"/api/blobs/{self.DIGEST}"
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'name="file"' in request.content
        assert b"GGUF-weights" in request.content

    def test_create_blob_from_file_object(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(201))

        assert client.create_blob(self.DIGEST, io.BytesIO(b"adapter-bytes")) is True
        assert b"adapter-bytes" in requests_seen[0].content

    def test_create_blob_error(self, make_client):
        client = make_client(lambda request: httpx.Response(400, text="digest mismatch"))
        with pytest.raises(OllamaRequestError):
            client.create_blob(self.DIGEST, b"bytes")

    def test_blob_requires_digest(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200))
        with pytest.raises(PreconditionError):
            client.is_blob_exists("")
        with pytest.raises(PreconditionError):
            client.create_blob(self.DIGEST, None)
        assert requests_seen == []


class TestCopyAndDelete:

    def test_copy_model(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200))

        assert client.copy_model("orca-mini", "orca-mini-1") is True
        assert requests_seen[0].url.path == "/api/copy"
        assert body_of(requests_seen[0]) == {"source": "orca-mini", "destination": "orca-mini-1"}

    @pytest.mark.parametrize("status", [404, 500])
    def test_copy_model_failure_is_not_raised(self, make_client, status):
        client = make_client(lambda request: httpx.Response(status, text="model 'orca-mini' not found"))
        assert client.copy_model("orca-mini", "orca-mini-1") is False

    def test_delete_model(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200))

        assert client.delete_model("foo") is True
        assert requests_seen[0].method == "DELETE"
        assert requests_seen[0].url.path == "/api/delete"
        assert body_of(requests_seen[0]) == {"name": "foo"}

    def test_delete_missing_model_is_success(self, make_client):
        """Test a 404 naming the model counts as already deleted."""
        client = make_client(lambda request: httpx.Response(404, text='{"error":"model \'foo\' not found"}'))
        assert client.delete_model("foo") is True

    def test_delete_404_for_other_reason_raises(self, make_client):
        client = make_client(lambda request: httpx.Response(404, text="404 page not found"))
        with pytest.raises(OllamaRequestError) as excinfo:
            client.delete_model("foo")
        assert excinfo.value.status_code == 404

    def test_delete_server_error_raises(self, make_client):
        client = make_client(lambda request: httpx.Response(500, text="could not delete foo"))
        with pytest.raises(OllamaRequestError) as excinfo:
            client.delete_model("foo")
        assert excinfo.value.status_code == 500


class TestPullPush:

    def test_pull_model(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json={"status": "success"}))

        progress = client.pull_model("orca-mini")

        assert requests_seen[0].url.path == "/api/pull"
        assert body_of(requests_seen[0]) == {"name": "orca-mini", "insecure": True, "stream": False}
        assert progress.status == "success"

    def test_push_model_with_credentials(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json={"status": "success"}))

        client.push_model("library/orca-mini-1:latest", insecure=False, username="me", password="secret")

        request = requests_seen[0]
        assert request.url.path == "/api/push"
        assert "authorization" not in request.headers
        assert body_of(request) == {
            "name": "library/orca-mini-1:latest",
            "insecure": False,
            "username": "me",
            "password": "secret",
            "stream": False,
        }

    def test_pull_requires_name(self, make_client, requests_seen):
        client = make_client(lambda request: httpx.Response(200, json={"status": "success"}))
        with pytest.raises(PreconditionError):
            client.pull_model("")
        assert requests_seen == []

    def test_push_error(self, make_client):
        client = make_client(lambda request: httpx.Response(401, text="unauthorized"))
        with pytest.raises(OllamaRequestError) as excinfo:
            client.push_model("library/orca-mini-1:latest")
        assert excinfo.value.status_code == 401
