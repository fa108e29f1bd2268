from prometheus_client import Counter, Gauge, Histogram

PUBLISH_COUNTER = Counter("osd_publish_total", "Announcement publish attempts", ["outcome"])
RESOLVE_HISTOGRAM = Histogram("osd_resolve_duration_seconds", "Duration of full directory resolutions in seconds")
RESOLVED_PEERS = Gauge("osd_resolved_peers", "Number of peers returned by the last resolution")
SKIPPED_ENTRIES_COUNTER = Counter("osd_skipped_entries_total", "Directory entries skipped while resolving", ["reason"])
STALE_DELETES_COUNTER = Counter("osd_stale_deletes_total", "Expired directory entries deleted", ["outcome"])
