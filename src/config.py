
import time
import logging
import boto3
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

PARAMETER_PREFIX = '/houserank/ranking'

@dataclass
class RankingConfig:
    default_collection_name: str = "Default Collection"
    default_ranking_name: str = "Main Ranking"
    lock_timeout_seconds: float = 5.0
    batch_comparator: str = "title"

class ConfigManager:
    def __init__(self, ttl_seconds: float = 60.0):
        self.ttl_seconds = ttl_seconds
        self._cached_config: Optional[RankingConfig] = None
        self._last_fetched_at: float = 0.0
        self._ssm_client = boto3.client('ssm')

    def get_config(self) -> RankingConfig:
        current_time = time.time()

        if self._cached_config and (current_time - self._last_fetched_at < self.ttl_seconds):
            return self._cached_config

        try:
            config = self._fetch_from_ssm()
            self._cached_config = config
            self._last_fetched_at = current_time
            return config
        except Exception as e:
            logger.warning("Error fetching ranking config, using defaults: %s", e)
            return self._get_default_config()

    def _fetch_from_ssm(self) -> RankingConfig:
        names = [
            f'{PARAMETER_PREFIX}/default_collection_name',
            f'{PARAMETER_PREFIX}/default_ranking_name',
            f'{PARAMETER_PREFIX}/lock_timeout_seconds',
            f'{PARAMETER_PREFIX}/batch_comparator'
        ]

        response = self._ssm_client.get_parameters(Names=names)
        params = {p['Name']: p['Value'] for p in response.get('Parameters', [])}
        defaults = self._get_default_config()

        default_collection_name = params.get(
            f'{PARAMETER_PREFIX}/default_collection_name', defaults.default_collection_name
        )
        default_ranking_name = params.get(
            f'{PARAMETER_PREFIX}/default_ranking_name', defaults.default_ranking_name
        )
        lock_timeout_seconds = float(params.get(
            f'{PARAMETER_PREFIX}/lock_timeout_seconds', str(defaults.lock_timeout_seconds)
        ))
        batch_comparator = params.get(f'{PARAMETER_PREFIX}/batch_comparator', defaults.batch_comparator)

        return RankingConfig(
            default_collection_name=default_collection_name,
            default_ranking_name=default_ranking_name,
            lock_timeout_seconds=lock_timeout_seconds,
            batch_comparator=batch_comparator
        )

    def _get_default_config(self) -> RankingConfig:
        return RankingConfig()
