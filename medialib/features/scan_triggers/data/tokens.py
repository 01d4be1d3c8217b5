import hashlib
import hmac
import math
import time
from typing import Callable, Optional

from medialib.core.config.settings import settings
from ..domain.interfaces import ITokenSigner

class HmacTokenSigner(ITokenSigner):
    """
    Tokens change every half lifetime ("tick"); the current and the previous
    tick are accepted, so a token lives between lifetime/2 and lifetime seconds.
    """

    TOKEN_LENGTH = 12

    def __init__(self,
                 secret: Optional[str] = None,
                 lifetime_seconds: Optional[int] = None,
                 clock: Callable[[], float] = time.time):
        self.secret = (secret or settings.SECRET_KEY).encode()
        self.lifetime_seconds = lifetime_seconds or settings.TOKEN_LIFETIME_SECONDS
        self.clock = clock

    def create(self, actor_id: str, action: str) -> str:
        return self._sign(self._tick(), actor_id, action)

    def verify(self, token: str, actor_id: str, action: str) -> bool:
        if not token:
            return False

        tick = self._tick()
        return any(
            hmac.compare_digest(token, self._sign(t, actor_id, action))
            for t in (tick, tick - 1)
        )

    def _tick(self) -> int:
        return math.ceil(self.clock() / (self.lifetime_seconds / 2))

    def _sign(self, tick: int, actor_id: str, action: str) -> str:
        message = f"{tick}|{action}|{actor_id}".encode()
        return hmac.new(self.secret, message, hashlib.sha256).hexdigest()[:self.TOKEN_LENGTH]
