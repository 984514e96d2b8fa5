import pytest
from fastapi.testclient import TestClient

from scholarship_ai.main import create_app


class StubGateway:
    """Records prompts and answers with canned text or a canned failure."""

    def __init__(self, text="Generated.", error=None):
        self.text = text
        self.error = error
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def gateway():
    return StubGateway()


@pytest.fixture
def client(gateway):
    return TestClient(create_app(gateway=gateway))
