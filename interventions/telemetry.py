"""Compteurs de télémétrie à clés, stockés dans des hash Redis."""
from typing import Dict

import redis.asyncio as redis
from redis.exceptions import RedisError

from interventions.config import settings
from interventions.logger import logger


class TelemetryRecorder:
    """Équivalent des "keyed scalars" : un hash Redis par compteur, un champ par clé."""
    def __init__(self):
        """Initialise le client Redis (connexion paresseuse)."""
        self.root = settings.TELEMETRY_ROOT
        self.enabled = settings.ENABLE_TELEMETRY
        self.redis = redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)

    def scalar_name(self, part: str) -> str:
        return f"{self.root}.{part}"

    async def keyed_scalar_add(self, part: str, key: str, value: int = 1) -> None:
        """Incrémente le compteur `part` pour la clé `key`. Une panne Redis n'est que journalisée."""
        if not self.enabled:
            return
        name = self.scalar_name(part)
        try:
            await self.redis.hincrby(name, key, value)
        except RedisError as e:
            logger.warning("Télémétrie perdue pour {name}[{key}] : {error}", name=name, key=key, error=e)

    async def snapshot(self, part: str) -> Dict[str, int]:
        """Valeurs courantes d'un compteur."""
        raw = await self.redis.hgetall(self.scalar_name(part))
        return {key: int(count) for key, count in raw.items()}

    async def ping(self) -> bool:
        return await self.redis.ping()

    async def close(self):
        """Ferme la connexion Redis."""
        await self.redis.close()

telemetry_recorder = TelemetryRecorder()
