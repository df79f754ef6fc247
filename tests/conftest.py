import pytest

from didlink.crypto.ed25519 import create_new_key_pair

from tests.factories import FakeClock, LinkPublisher


@pytest.fixture
def key_pair():
    return create_new_key_pair()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def publisher():
    return LinkPublisher()
