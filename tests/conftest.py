from unittest.mock import patch

import pytest

from fakes import SERVICE_ROOT, make_response
from neo4j_rest.client import Neo4jClient, Neo4jClientConfig


@pytest.fixture
def config():
  return Neo4jClientConfig(
    host="localhost", port=7474, username="neo4j", password="secret"
  )


@pytest.fixture
async def client(config):
  """A client that has not connected yet."""
  client = Neo4jClient(config)
  yield client
  await client.close()


@pytest.fixture
async def connected_client(client):
  """A client whose handshake against a mocked server has completed."""
  with patch.object(
    client.client, "request", return_value=make_response(200, SERVICE_ROOT)
  ):
    await client.connect()
  return client
