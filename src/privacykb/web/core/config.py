"""Configuration loading for the web application."""

from privacykb.config import ConfigManager, KnowledgeBaseConfig
from privacykb.system.path_resolver import PathResolver


def get_config(path_resolver: PathResolver | None = None) -> KnowledgeBaseConfig:
    """Load the knowledge base configuration.

    Args:
        path_resolver: Optional PathResolver instance to use. If not provided,
                      creates a new PathResolver instance.

    Returns:
        KnowledgeBaseConfig: The loaded and validated configuration.
    """
    if path_resolver is None:
        path_resolver = PathResolver()
    parser = ConfigManager(path_resolver)
    return parser.load()
