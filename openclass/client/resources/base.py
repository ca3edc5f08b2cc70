# openclass/client/resources/base.py
from ..http import ApiClient
from ..mutations import MutationRunner
from ..query_cache import QueryClient

SECOND = 1
MINUTE = 60 * SECOND


class Resource:
    """One server resource: its cache keys, reads and writes."""

    def __init__(self, api: ApiClient, queries: QueryClient, mutations: MutationRunner):
        self.api = api
        self.queries = queries
        self.mutations = mutations
