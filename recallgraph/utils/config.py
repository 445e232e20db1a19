"""
Configuration management for retrieval, graph and storage settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class RetrievalConfig:
    """Configuration for top-K retrieval and narrative keywords."""
    limit: int
    query_keywords: int
    summary_keywords: int
    concept_limit: int


@dataclass
class GraphConfig:
    """Configuration for graph synthesis."""
    query_label_max: int


@dataclass
class StoreConfig:
    """Configuration for the JSON memory store."""
    path: str
    seed_on_empty: bool
    recent_limit: int


@dataclass
class AppConfig:
    """Main application configuration."""
    environment: str
    log_level: str
    retrieval: RetrievalConfig
    graph: GraphConfig
    store: StoreConfig


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


def load_config() -> AppConfig:
    """Load configuration from environment variables with defaults."""
    environment = os.getenv('ENVIRONMENT', 'development')

    # Retrieval configuration
    retrieval_config = RetrievalConfig(limit=int(os.getenv('RETRIEVAL_LIMIT', '5')),
                                       query_keywords=int(os.getenv('RETRIEVAL_QUERY_KEYWORDS', '6')),
                                       summary_keywords=int(os.getenv('RETRIEVAL_SUMMARY_KEYWORDS', '3')),
                                       concept_limit=int(os.getenv('RETRIEVAL_CONCEPT_LIMIT', '8')))

    # Graph configuration
    graph_config = GraphConfig(query_label_max=int(os.getenv('GRAPH_QUERY_LABEL_MAX', '48')))

    # Store configuration
    store_config = StoreConfig(path=os.getenv('MEMORY_STORE_PATH', 'memories.json'),
                               seed_on_empty=_env_bool('MEMORY_STORE_SEED', 'true'),
                               recent_limit=int(os.getenv('MEMORY_RECENT_LIMIT', '12')))

    return AppConfig(environment=environment,
                     log_level=os.getenv('LOG_LEVEL', 'INFO'),
                     retrieval=retrieval_config,
                     graph=graph_config,
                     store=store_config)


# Global configuration instance
config = load_config()
