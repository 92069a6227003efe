import os
from pathlib import Path


class PathResolver:
    """Central authority for all file path resolution in the knowledge base service.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        # Core directory paths from environment variables
        self.app_dir = Path(os.getenv("PRIVACYKB_APP", "/opt/privacykb"))
        self.data_dir = Path(os.getenv("PRIVACYKB_DATA", "/var/lib/privacykb"))

    def get_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks PRIVACYKB_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("PRIVACYKB_CONFIG")
        if config_path:
            return Path(config_path)

        return self.data_dir / "config" / "privacykb.yaml"

    def get_database_path(self) -> Path:
        """Get the path to the knowledge base SQLite database.

        Checks PRIVACYKB_DATABASE first so a deployment can point at a database
        built elsewhere (the ingestion tool usually runs offline).
        """
        database_path = os.getenv("PRIVACYKB_DATABASE")
        if database_path:
            return Path(database_path)

        return self.data_dir / "database" / "kb.db"

    def get_locales_dir(self) -> Path:
        """Get the directory for i18n locale files (.po/.mo)."""
        return self.app_dir / "locales"
