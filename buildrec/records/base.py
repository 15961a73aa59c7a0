import logging

from ..contracts.toolchain import DeploymentRepository, TaskListener, Toolchain
from ..memory.history import DeploymentAttempt, DeploymentHistory

logger = logging.getLogger(__name__)


class AbstractArtifactRecord:
    """
    Common base of module and aggregated artifact records.

    Subclasses implement ``deploy``; ``redeploy`` wraps it with history
    bookkeeping for deployments triggered after the build finished.
    """

    @property
    def build(self):
        raise NotImplementedError

    @property
    def url(self) -> str:
        """URL relative to the application root, ending with '/'."""
        return self.build.url + "mavenArtifacts/"

    @property
    def absolute_url(self) -> str:
        return self.build.absolute_url + "mavenArtifacts/"

    def deploy(self, toolchain: Toolchain, repository: DeploymentRepository, listener: TaskListener):
        raise NotImplementedError

    def redeploy(self, toolchain: Toolchain, repository: DeploymentRepository, listener: TaskListener,
                 history: DeploymentHistory) -> DeploymentAttempt:
        """
        Deploy and record the attempt in ``history``.

        A failed attempt is recorded before the error is re-raised.
        """
        attempt = DeploymentAttempt(
            record_url=self.url,
            repository_id=repository.id,
            repository_url=repository.url,
        )
        logger.info("Redeploying %s to %s", self.url, repository.url)
        try:
            self.deploy(toolchain, repository, listener)
        except Exception as e:
            attempt = attempt.model_copy(update={"result": "FAILURE", "error": str(e)})
            history.add(attempt)
            logger.warning("Redeploy of %s failed: %s", self.url, e)
            raise
        attempt = attempt.model_copy(update={"result": "SUCCESS"})
        history.add(attempt)
        return attempt
