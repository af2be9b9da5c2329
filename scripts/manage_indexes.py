#!/usr/bin/env python3
"""
Manage Azure AI Search memory indexes.

Reads the connection settings from AZURE_AI_SEARCH_* environment variables,
or from a JSON/YAML file passed with --config.

Usage:
    python scripts/manage_indexes.py list
    python scripts/manage_indexes.py create NAME --vector-size 384
    python scripts/manage_indexes.py delete NAME [--yes]
"""

import sys
import asyncio
import argparse
import logging

from aisearch_memory import AzureAISearchConfig, ConfigurationError, get_azure_ai_search_memory


class _NoEmbedder:
    """Index management never embeds text"""

    async def generate_embedding(self, text: str):
        raise RuntimeError("Embedding is not available in manage_indexes")


async def run(args: argparse.Namespace) -> int:
    config = AzureAISearchConfig.from_file(args.config) if args.config else AzureAISearchConfig.from_env()
    AzureAISearchMemory = get_azure_ai_search_memory()

    async with AzureAISearchMemory(config, _NoEmbedder()) as memory:
        if args.command == "list":
            for name in await memory.get_indexes():
                print(name)

        elif args.command == "create":
            await memory.create_index(args.name, args.vector_size)
            print(f"Index '{args.name}' is ready")

        elif args.command == "delete":
            if not args.yes:
                response = input(f"Delete index '{args.name}' and all its records? [y/N]: ").strip().lower()
                if response != "y":
                    print("Aborted.")
                    return 1
            await memory.delete_index(args.name)
            print(f"Index '{args.name}' deleted")

    return 0


def main():
    parser = argparse.ArgumentParser(description="Manage Azure AI Search memory indexes")
    parser.add_argument("--config", type=str, help="Path to config file (JSON/YAML)")
    parser.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List index names")

    create_parser = subparsers.add_parser("create", help="Create an index with the default memory schema")
    create_parser.add_argument("name", type=str)
    create_parser.add_argument("--vector-size", type=int, required=True, help="Embedding dimension")

    delete_parser = subparsers.add_parser("delete", help="Delete an index")
    delete_parser.add_argument("name", type=str)
    delete_parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        return asyncio.run(run(args))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
