"""Search-engine fakes shared by the test modules."""

import json

import httpx

ES_URL = "http://es.test:9200"
ES_INDEX = "hosts.test"
ES_USERNAME = "elastic"
ES_PASSWORD = "changeme"

OS_SCRIPT = (
    "if(doc['host.system_profile_facts.operating_system.name'].size()!=0 && "
    "doc['host.system_profile_facts.operating_system.major'].size()!=0 && "
    "doc['host.system_profile_facts.operating_system.minor'].size()!=0)"
    "{return doc['host.system_profile_facts.operating_system.name'].value + '||||' + "
    "doc['host.system_profile_facts.operating_system.major'].value + '||||' + "
    "doc['host.system_profile_facts.operating_system.minor'].value;}"
)


def es_response(buckets=None, hits_total=0):
    body = {
        "took": 1,
        "timed_out": False,
        "_shards": {"total": 3, "successful": 3, "skipped": 0, "failed": 0},
        "hits": {"total": {"value": hits_total, "relation": "eq"}, "max_score": None, "hits": []},
    }
    if buckets is not None:
        body["aggregations"] = {
            "terms": {"doc_count_error_upper_bound": 0, "sum_other_doc_count": 0, "buckets": buckets}
        }
    return body


def es_window_error(window=10010):
    reason = (
        f"Result window is too large, from + size must be less than or equal to: [10000] "
        f"but was [{window}]. See the scroll api for a more efficient way to request large data sets."
    )
    return {
        "error": {
            "root_cause": [{"type": "illegal_argument_exception", "reason": reason}],
            "type": "search_phase_execution_exception",
            "reason": "all shards failed",
        },
        "status": 400,
    }


def es_request(**terms):
    return {
        "aggs": {
            "terms": {
                "terms": {
                    **terms,
                    "size": 10000,
                    "show_term_doc_count_error": True,
                    "order": [{"_key": "ASC"}],
                }
            }
        },
        "query": {"bool": {"filter": []}},
        "_source": [],
        "size": 0,
    }


class FakeSearchEngine:
    """Stands in for the search engine behind an ``httpx.MockTransport``."""

    def __init__(self):
        self.requests = []
        self._responses = []

    def respond(self, body=None, status=200):
        self._responses.append((status, es_response() if body is None else body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(
            {
                "path": request.url.path,
                "body": json.loads(request.content or b"{}"),
                "authorization": request.headers.get("authorization"),
            }
        )
        status, body = self._responses.pop(0) if self._responses else (200, es_response())
        return httpx.Response(status, json=body)

    @property
    def bodies(self):
        return [r["body"] for r in self.requests]


