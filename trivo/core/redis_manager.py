import logging
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, List, Optional

import redis.asyncio as redis
import ujson

logger = logging.getLogger(__name__)


class AsyncRedisManager:
    """Gestor Redis asíncrono para eventos de notificaciones en tiempo real"""

    def __init__(self):
        self.redis: Optional[redis.Redis] = None
        self._connected = False

        # Keys de Redis
        self.KEYS = {
            "notificaciones": "notificaciones:usuario:{}",  # canal por usuario
            "historial": "notificaciones:usuario:{}:history",
        }

    async def connect(self, redis_url: str) -> bool:
        """Conectar a Redis con reconexión automática"""
        try:
            self.redis = redis.from_url(
                redis_url,
                encoding="utf-8",
                decode_responses=True,
                retry_on_timeout=True,
                socket_keepalive=True,
                health_check_interval=30,
            )
            await self.redis.ping()
            self._connected = True
            logger.info("✅ Redis conectado en %s", redis_url)
            return True
        except Exception as e:
            logger.warning("❌ Error conectando a Redis: %s", e)
            self.redis = None
            self._connected = False
            return False

    async def disconnect(self):
        if self.redis:
            await self.redis.close()
        self._connected = False
        logger.info("Redis desconectado")

    @property
    def is_connected(self) -> bool:
        return self._connected and self.redis is not None

    def _canal(self, usuario_id: int) -> str:
        return self.KEYS["notificaciones"].format(usuario_id)

    async def publish_event(self, usuario_id: int, event_data: Dict[str, Any]) -> bool:
        """Publicar evento para un usuario. Nunca propaga errores de Redis."""
        if not self.is_connected:
            return False

        if "timestamp" not in event_data:
            event_data["timestamp"] = datetime.now(timezone.utc).isoformat()

        try:
            payload = ujson.dumps(event_data)
            await self.redis.publish(self._canal(usuario_id), payload)

            historial = self.KEYS["historial"].format(usuario_id)
            await self.redis.lpush(historial, payload)
            await self.redis.ltrim(historial, 0, 99)
            return True
        except Exception as e:
            logger.warning("Error publicando evento en Redis: %s", e)
            return False

    async def subscribe_events(self, usuario_id: int) -> AsyncGenerator[Dict[str, Any], None]:
        """Suscribirse a los eventos de un usuario"""
        if not self.is_connected:
            return

        pubsub = self.redis.pubsub()
        await pubsub.subscribe(self._canal(usuario_id))
        try:
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                try:
                    yield ujson.loads(message["data"])
                except ValueError as e:
                    logger.warning("Evento inválido en Redis: %s", e)
        finally:
            await pubsub.unsubscribe(self._canal(usuario_id))
            await pubsub.close()

    async def get_recent_events(self, usuario_id: int, limit: int = 20) -> List[Dict[str, Any]]:
        if not self.is_connected:
            return []
        raw = await self.redis.lrange(self.KEYS["historial"].format(usuario_id), 0, limit - 1)
        events = []
        for item in raw:
            try:
                events.append(ujson.loads(item))
            except ValueError:
                continue
        return events

    async def health_check(self) -> Dict[str, Any]:
        """Verificación de salud de Redis"""
        if not self.is_connected:
            return {"status": "disconnected"}
        try:
            await self.redis.ping()
            info = await self.redis.info()
            return {
                "status": "healthy",
                "redis_version": info.get("redis_version", "unknown"),
                "connected_clients": info.get("connected_clients", 0),
            }
        except Exception as e:
            return {"status": "error", "error": str(e)}


# Instancia global
redis_manager = AsyncRedisManager()
