from abc import ABC, abstractmethod

class ITokenSigner(ABC):
    """
    Contract for short-lived anti-replay tokens bound to an actor and an action.
    """

    @abstractmethod
    def create(self, actor_id: str, action: str) -> str:
        pass

    @abstractmethod
    def verify(self, token: str, actor_id: str, action: str) -> bool:
        pass
