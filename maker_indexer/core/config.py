# maker_indexer/core/config.py

import os
from pathlib import Path
from typing import Mapping, Optional

from msgspec import Struct

from ..types import DatabaseConfig, RpcConfig, InvalidConfigError
from .logging import IndexerLogger, log_with_context, INFO


ENV_PREFIX = "MAKER_INDEXER_"


class IndexerSettings(Struct):
    database: DatabaseConfig
    rpc: Optional[RpcConfig] = None
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    log_structured: bool = False

    @classmethod
    def from_env(cls, env_vars: Optional[Mapping[str, str]] = None) -> 'IndexerSettings':
        if env_vars is None:
            from dotenv import load_dotenv
            load_dotenv()
            env_vars = os.environ
        env = env_vars

        db_url = env.get(f"{ENV_PREFIX}DB_URL")
        if not db_url:
            raise InvalidConfigError(f"{ENV_PREFIX}DB_URL is not set")

        database = DatabaseConfig(
            url=db_url,
            pool_size=int(env.get(f"{ENV_PREFIX}DB_POOL_SIZE", "5")),
            max_overflow=int(env.get(f"{ENV_PREFIX}DB_MAX_OVERFLOW", "10")),
        )

        rpc = None
        rpc_url = env.get(f"{ENV_PREFIX}RPC_URL")
        if rpc_url:
            rpc = RpcConfig(
                endpoint_url=rpc_url,
                timeout=int(env.get(f"{ENV_PREFIX}RPC_TIMEOUT", "30")),
            )

        log_dir = env.get(f"{ENV_PREFIX}LOG_DIR")

        settings = cls(
            database=database,
            rpc=rpc,
            log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO"),
            log_dir=Path(log_dir) if log_dir else None,
            log_structured=env.get(f"{ENV_PREFIX}LOG_STRUCTURED", "false").lower() == "true",
        )

        logger = IndexerLogger.get_logger('core.config')
        log_with_context(logger, INFO, "Indexer settings loaded",
                        rpc_configured=rpc is not None,
                        log_level=settings.log_level)
        return settings

    def configure_logging(self) -> None:
        IndexerLogger.reset()
        IndexerLogger.configure(
            log_dir=self.log_dir,
            log_level=self.log_level,
            console_enabled=True,
            file_enabled=self.log_dir is not None,
            structured_format=self.log_structured,
        )
