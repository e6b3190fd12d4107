from parkit.services.search.spot_search import SearchResult, filter_spots, search

__all__ = ["SearchResult", "filter_spots", "search"]
