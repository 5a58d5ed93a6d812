import fire
import logging
import sys

from .context import InitContext
from .errors import ChaincodeCliError
from .pipeline import run_init

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging with the specified level."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class ChaincodeCLI:
    def init(self, path: str, log_level: str = "INFO") -> None:
        """
        Initialize a new chaincode project, or bring an existing one up to date.

        Existing package.json fields and files are never overwritten; only what
        is missing gets added.

        Args:
            path: Project directory, relative to the current directory
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        setup_logging(log_level)
        logger.info("executing init")

        try:
            ctx = InitContext.from_path(path)
            run_init(ctx)
        except (ChaincodeCliError, OSError) as e:
            logger.error(f"Init failed: {e}")
            sys.exit(1)

        print('!! Don\'t forget to run "npm install"', file=ctx.stdout)


def main() -> None:
    fire.Fire(ChaincodeCLI)


if __name__ == "__main__":
    main()
