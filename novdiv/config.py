
import logging
import time
import boto3
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

PARAMETER_PREFIX = '/reco/rerank'

@dataclass
class RerankConfig:
    method: str = "oneshot"
    lambda_: float = 0.5
    cutoff: int = 100
    max_length: int = 0
    normalize: bool = True
    parallel_enabled: bool = False

class ConfigManager:
    def __init__(self, ttl_seconds: float = 60.0):
        self.ttl_seconds = ttl_seconds
        self._cached_config: Optional[RerankConfig] = None
        self._last_fetched_at: float = 0.0
        self._ssm_client = boto3.client('ssm')

    def get_config(self) -> RerankConfig:
        current_time = time.time()

        if self._cached_config and (current_time - self._last_fetched_at < self.ttl_seconds):
            return self._cached_config

        try:
            config = self._fetch_from_ssm()
            self._cached_config = config
            self._last_fetched_at = current_time
            return config
        except Exception as e:
            logger.warning("failed to fetch rerank config, using defaults: %s", e)
            return self._get_default_config()

    def _fetch_from_ssm(self) -> RerankConfig:
        names = [
            f'{PARAMETER_PREFIX}/method',
            f'{PARAMETER_PREFIX}/lambda',
            f'{PARAMETER_PREFIX}/cutoff',
            f'{PARAMETER_PREFIX}/max_length',
            f'{PARAMETER_PREFIX}/normalize',
            f'{PARAMETER_PREFIX}/parallel_enabled',
        ]

        response = self._ssm_client.get_parameters(Names=names)
        params = {p['Name']: p['Value'] for p in response.get('Parameters', [])}

        def get(name: str, default: str) -> str:
            return params.get(f'{PARAMETER_PREFIX}/{name}', default)

        lambda_ = float(get('lambda', '0.5'))
        if not 0.0 <= lambda_ <= 1.0:
            raise ValueError(f"lambda out of range: {lambda_}")
        cutoff = int(get('cutoff', '100'))
        max_length = int(get('max_length', '0'))
        if cutoff < 0 or max_length < 0:
            raise ValueError(f"cutoff and max_length must be non-negative: {cutoff}, {max_length}")

        # "true" (大文字小文字を区別しない) のみ True とみなす
        return RerankConfig(
            method=get('method', 'oneshot'),
            lambda_=lambda_,
            cutoff=cutoff,
            max_length=max_length,
            normalize=get('normalize', 'true').lower() == 'true',
            parallel_enabled=get('parallel_enabled', 'false').lower() == 'true',
        )

    def _get_default_config(self) -> RerankConfig:
        # 安全側に倒す(並列なし)
        return RerankConfig()
