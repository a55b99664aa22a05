"""Redis HTML 프래그먼트 캐시 서비스 - 태그 기반 무효화

저장 구조:
- html:<fingerprint>   -> CachedFragment JSON (TTL 또는 만료 시각까지)
- html:tag:<tag>       -> 해당 태그를 가진 캐시 키 Set
"""
from datetime import datetime
from typing import Iterable, Optional

from pydantic import ValidationError
from redis import Redis

from src.core.config import settings
from src.core.logging import logger
from src.core.exceptions import (
    CacheConnectionException,
    CacheSerializationException,
)
from src.schemas.catalog_schema import CachedFragment, utcnow
from src.utils.hash_utils import generate_tag_key

KEY_PATTERN = "html:*"


class HtmlCacheService:
    """Redis 프래그먼트 캐시 관리 서비스"""
    
    def __init__(self, redis_client: Optional[Redis] = None, ttl: Optional[int] = None):
        """Redis 클라이언트 초기화

        Raises:
            CacheConnectionException: Redis 연결 실패
        """
        self.ttl = ttl or settings.cache_ttl
        try:
            self.redis_client = redis_client or Redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            # 연결 테스트
            self.redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise CacheConnectionException(reason=str(e))
    
    def get(self, key: str) -> Optional[CachedFragment]:
        """
        캐시된 프래그먼트 조회
        
        Args:
            key: 프래그먼트 캐시 키
            
        Returns:
            CachedFragment 또는 None (만료된 엔트리 포함)

        Raises:
            CacheSerializationException: 저장된 값이 손상된 경우
            CacheConnectionException: Redis 읽기 실패
        """
        try:
            cached_data = self.redis_client.get(key)
        except Exception as e:
            logger.error(f"Cache read error: {e}")
            raise CacheConnectionException(reason=f"read failed: {e}")

        if not cached_data:
            logger.debug(f"Cache miss for key: {key}")
            return None

        try:
            entry = CachedFragment.model_validate_json(cached_data)
        except ValidationError as e:
            logger.error(f"Failed to deserialize cache: {e}")
            raise CacheSerializationException(operation="deserialize", reason=str(e), details={"key": key})

        if entry.is_expired():
            logger.debug(f"Cache entry expired for key: {key}")
            return None

        logger.debug(f"Cache hit for key: {key}")
        return entry
    
    def set(self, entry: CachedFragment) -> bool:
        """
        프래그먼트 캐싱 (태그 역인덱스 포함)
        
        Args:
            entry: 저장할 엔트리
            
        Returns:
            저장 여부 (이미 만료된 엔트리는 저장하지 않음)
        """
        ttl = self._ttl_for(entry.expire)
        if ttl <= 0:
            logger.debug(f"Skip caching already expired entry: {entry.key}")
            return False

        try:
            payload = entry.model_dump_json()
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize cache data: {e}")
            raise CacheSerializationException(operation="serialize", reason=str(e))

        try:
            pipe = self.redis_client.pipeline()
            pipe.setex(entry.key, ttl, payload)
            for tag in entry.tags:
                tag_key = generate_tag_key(tag)
                pipe.sadd(tag_key, entry.key)
                # 태그 Set 은 가장 오래 사는 엔트리만큼 유지 (Redis 7+ NX/GT)
                pipe.expire(tag_key, ttl, nx=True)
                pipe.expire(tag_key, ttl, gt=True)
            pipe.execute()
        except Exception as e:
            logger.error(f"Cache write error: {e}")
            raise CacheConnectionException(reason=f"write failed: {e}")

        logger.info(f"Cache set for key: {entry.key}, TTL: {ttl}s, tags: {len(entry.tags)}")
        return True

    def invalidate_tags(self, tags: Iterable[str]) -> int:
        """
        태그 중 하나라도 가진 모든 엔트리 삭제
        
        Args:
            tags: 무효화할 태그
            
        Returns:
            삭제된 엔트리 수
        """
        tag_keys = [generate_tag_key(tag) for tag in set(tags)]
        if not tag_keys:
            return 0

        try:
            keys: set[str] = set()
            for tag_key in tag_keys:
                keys.update(self.redis_client.smembers(tag_key) or ())

            deleted = self.redis_client.delete(*keys) if keys else 0
            self.redis_client.delete(*tag_keys)
        except Exception as e:
            logger.error(f"Cache invalidation error: {e}")
            raise CacheConnectionException(reason=f"invalidation failed: {e}")

        logger.info(f"Cache invalidated by {len(tag_keys)} tags: {deleted} entries")
        return int(deleted)

    def delete(self, key: str) -> bool:
        """
        캐시 삭제
        
        Args:
            key: 프래그먼트 캐시 키
            
        Returns:
            성공 여부
        """
        try:
            result = self.redis_client.delete(key)
            logger.info(f"Cache deleted for key: {key}")
            return result > 0
        except Exception as e:
            logger.error(f"Cache delete error: {e}")
            return False

    def clear(self) -> int:
        """모든 프래그먼트/태그 키 삭제"""
        try:
            keys = list(self.redis_client.scan_iter(match=KEY_PATTERN))
            deleted = self.redis_client.delete(*keys) if keys else 0
        except Exception as e:
            logger.error(f"Cache clear error: {e}")
            raise CacheConnectionException(reason=f"clear failed: {e}")
        logger.info(f"Cache cleared: {deleted} keys")
        return int(deleted)
    
    def health_check(self) -> bool:
        """Redis 연결 상태 확인"""
        try:
            self.redis_client.ping()
            return True
        except Exception:
            return False

    def _ttl_for(self, expire: Optional[datetime]) -> int:
        if expire is None:
            return self.ttl
        # 만료 시각이 TTL 보다 멀면 TTL 로 제한
        return min(self.ttl, int((expire - utcnow()).total_seconds()))
