#!/usr/bin/env python3
"""
Basic Usage Demo

Connects to a local Neo4j server, creates two nodes joined by a
relationship, reads them back and cleans up.

Usage:
    uv run examples/basic_usage/main.py
    uv run examples/basic_usage/main.py --host db.local --port 7474 --username neo4j --password secret
"""

import argparse
import asyncio
import sys

from neo4j_rest import Neo4jClient, Neo4jClientConfig, Neo4jRestError
from neo4j_rest.config.logging import setup_logging


async def run(config: Neo4jClientConfig):
  async with Neo4jClient(config) as client:
    endpoints = await client.connect()
    print(f"✅ Connected (Neo4j {endpoints.neo4j_version or 'unknown'})")

    john = await client.create_node({"firstName": "John", "lastName": "Doe"})
    jane = await client.create_node({"firstName": "Jane", "lastName": "Doe"})
    print(f"Created nodes {john.id} and {jane.id}")

    knows = await client.create_relationship(john, jane, "KNOWS", {"since": 2016})
    print(f"Created relationship {knows.id} ({knows.type})")

    await client.set_property(jane, "node", "age", 34)
    print(f"Jane's properties: {await client.get_properties(jane.id, 'node')}")

    result = await client.cypher(
      {
        "statement": "MATCH (a)-[r:KNOWS]->(b) WHERE id(a) = $id RETURN b.firstName",
        "parameters": {"id": john.id},
      }
    )
    print(f"John knows: {[datum.row[0] for datum in result.results[0].data]}")

    await client.delete_relationship(knows)
    await client.delete_node(john)
    await client.delete_node(jane)
    print("Cleaned up")


def main():
  parser = argparse.ArgumentParser(description="Run the basic Neo4j REST client demo")
  parser.add_argument("--protocol", default="http", choices=["http", "https"])
  parser.add_argument("--host", default="localhost")
  parser.add_argument("--port", type=int, default=7474)
  parser.add_argument("--username", default="neo4j")
  parser.add_argument("--password", default="neo4j")
  args = parser.parse_args()

  setup_logging()

  config = Neo4jClientConfig(
    protocol=args.protocol,
    host=args.host,
    port=args.port,
    username=args.username,
    password=args.password,
  )

  try:
    asyncio.run(run(config))
  except Neo4jRestError as e:
    print(f"\n❌ Demo failed: {e}")
    sys.exit(1)


if __name__ == "__main__":
  main()
