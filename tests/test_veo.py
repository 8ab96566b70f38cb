"""Tests for VeoJobService: mapping Veo operations onto JobStatus."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from conceptlab.media.errors import JobFailedError, MissingCredentialError
from conceptlab.media.jobs import JobHandle, JobStatus
from conceptlab.media.veo import VeoJobService, VideoRequest


def _operation(done=False, error=None, uri=None, videos=True, name="operations/op-1"):
    response = None
    if done and not error:
        generated = [SimpleNamespace(video=SimpleNamespace(uri=uri))] if videos else []
        response = SimpleNamespace(generated_videos=generated)
    return SimpleNamespace(name=name, done=done, error=error, response=response, result=response)


@pytest.fixture
def genai_client():
    return MagicMock()


class TestSubmit:
    async def test_starts_generation(self, genai_client):
        genai_client.models.generate_videos.return_value = _operation()
        service = VeoJobService("K", "veo-test", client=genai_client)

        handle = await service.submit(VideoRequest(prompt="shield throw"))

        assert handle.name == "operations/op-1"
        kwargs = genai_client.models.generate_videos.call_args.kwargs
        assert kwargs["model"] == "veo-test"
        assert kwargs["prompt"] == "shield throw"
        assert kwargs["config"].aspect_ratio == "16:9"
        assert kwargs["config"].number_of_videos == 1

    async def test_missing_key_without_client(self):
        service = VeoJobService(None, "veo-test")
        with pytest.raises(MissingCredentialError):
            await service.submit(VideoRequest(prompt="x"))


class TestCheck:
    async def test_pending(self, genai_client):
        genai_client.operations.get.return_value = _operation(done=False)
        service = VeoJobService("K", "veo-test", client=genai_client)
        handle = JobHandle(name="operations/op-1", operation=object())

        status = await service.check(handle)

        assert status == JobStatus.pending()
        genai_client.operations.get.assert_called_once_with(handle.operation)

    async def test_done_returns_uri(self, genai_client):
        genai_client.operations.get.return_value = _operation(
            done=True, uri="https://example.test/files/v:download?alt=media"
        )
        service = VeoJobService("K", "veo-test", client=genai_client)

        status = await service.check(JobHandle(name="op"))

        assert status.done
        assert status.locator == "https://example.test/files/v:download?alt=media"

    async def test_done_with_error(self, genai_client):
        genai_client.operations.get.return_value = _operation(
            done=True, error={"code": 3, "message": "prompt was blocked"}
        )
        service = VeoJobService("K", "veo-test", client=genai_client)

        with pytest.raises(JobFailedError, match="prompt was blocked"):
            await service.check(JobHandle(name="op"))

    async def test_done_without_videos(self, genai_client):
        genai_client.operations.get.return_value = _operation(done=True, videos=False)
        service = VeoJobService("K", "veo-test", client=genai_client)

        with pytest.raises(JobFailedError, match="no video"):
            await service.check(JobHandle(name="op"))
