from permitgen.domain.identity.util.di.provider import IdentityProvider

__all__ = ["IdentityProvider"]
