import httpx

from indextank.helper.HelperConfig import HelperConfig
from indextank.clients.search.SearchClientInterface import SearchClientInterface


class SearchClientManager:
    """Manager class to instantiate the configured search client."""

    def __init__(self, helper_config: HelperConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self._transport = transport
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """Read the search engine name from env configuration.

        Returns:
            str: Capitalised engine name (e.g. "Indextank").

        Raises:
            ValueError: If SEARCH_ENGINE is not set or empty.
        """
        engine = self.helper_config.get_string_val("SEARCH_ENGINE")
        if not engine:
            raise ValueError("No search engine specified in configuration (SEARCH_ENGINE).")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> SearchClientInterface:
        """Instantiate the search client for the configured engine.

        Raises:
            ValueError: If the engine is unsupported or cannot be imported.
        """
        engine = self._get_engine_from_env()
        class_name = f"SearchClient{engine}"
        try:
            module = __import__(
                f"indextank.clients.search.{engine.lower()}.{class_name}",
                fromlist=[class_name],
            )
            client_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ValueError("Unsupported search engine '%s'. Error: %s" % (engine, e))
        client = client_class(helper_config=self.helper_config, transport=self._transport)
        self.logging.debug("Instantiated search client for engine: %s", engine)
        return client

    def get_client(self) -> SearchClientInterface:
        """Return the instantiated search client."""
        return self.client
