"""Map module paths to source repositories."""

from typing import Dict, Iterable, List

from glicense._manifest.models import ModuleVersion
from glicense.logging_config import logger

from .models import Repository

# Hosts whose module paths are host/author/project
KNOWN_HOSTS = ("github.com", "gitlab.com", "bitbucket.org")

# gopkg.in/<author>/<pkg>.vN and gopkg.in/<pkg>.vN point at GitHub
REDIRECTOR_HOST = "gopkg.in"
REDIRECT_TARGET = "github.com"

# Everything else is looked up on the Go package index
METADATA_HOST = "pkg.go.dev"


def _strip_suffix(segment: str) -> str:
    """Drop a dotted suffix such as a gopkg.in major version (yaml.v2 -> yaml)."""
    return segment.split(".", 1)[0]


class Resolver:
    """
    Resolves module references to Repository records.

    Each instance owns its cache, so a run should create one Resolver
    and throw it away afterwards. Resolving the same module path twice
    returns the very same Repository object.

    The cache is not locked: resolution runs sequentially before
    enrichment fans out.

    Example:
        resolver = Resolver()
        repo = resolver.resolve(ModuleVersion("github.com/pkg/errors", "v0.9.1"))
        repo.url  # "https://github.com/pkg/errors"
    """

    def __init__(self) -> None:
        self._cache: Dict[str, Repository] = {}

    @property
    def cache_size(self) -> int:
        """Number of module paths resolved so far."""
        return len(self._cache)

    def clear(self) -> None:
        """Forget all resolved module paths."""
        self._cache.clear()

    def resolve(self, module: ModuleVersion) -> Repository:
        """
        Resolve one module to its repository.

        Args:
            module: Parsed manifest requirement

        Returns:
            The cached Repository for this path, or a newly resolved one
        """
        cached = self._cache.get(module.path)
        if cached is not None:
            logger.debug(f"Cache hit (resolver): {module.path}")
            return cached

        repository = self._resolve(module)
        self._cache[module.path] = repository
        return repository

    def resolve_all(self, modules: Iterable[ModuleVersion]) -> List[Repository]:
        """Resolve modules, keeping their order."""
        return [self.resolve(module) for module in modules]

    def _resolve(self, module: ModuleVersion) -> Repository:
        path = module.path
        segments = path.split("/")
        head = segments[0]

        if head in KNOWN_HOSTS:
            if len(segments) < 3:
                return self._partial(module)
            author, project = segments[1], segments[2]
            return Repository(
                name=path,
                version=module.version,
                host=head,
                author=author,
                project=project,
                url=f"https://{head}/{author}/{project}",
            )

        if head == REDIRECTOR_HOST:
            if len(segments) >= 3:
                author, project = segments[1], _strip_suffix(segments[2])
            elif len(segments) == 2 and segments[1]:
                # Short form gopkg.in/<pkg>.vN
                author = project = _strip_suffix(segments[1])
            else:
                return self._partial(module)
            return Repository(
                name=path,
                version=module.version,
                host=REDIRECT_TARGET,
                author=author,
                project=project,
                url=f"https://{REDIRECT_TARGET}/{author}/{project}",
            )

        return Repository(
            name=path,
            version=module.version,
            host=METADATA_HOST,
            url=f"https://{METADATA_HOST}/{path}",
        )

    @staticmethod
    def _partial(module: ModuleVersion) -> Repository:
        logger.debug(f"Cannot derive a repository from {module.path}, keeping it unresolved")
        return Repository(name=module.path, version=module.version)
