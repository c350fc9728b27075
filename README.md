# loquat

Building blocks for an asynchronous message-processing bot framework.
The package has no runtime dependencies.

## What is in it

- `loquat.route_types` — `RouteTarget` (an adapter, broadcast or none, with
  `to_json` / `from_json`), `RouteState`, `RouterConfig`, `RouteResult`, and the
  abstract `Router` with `route_batch`, `is_enabled` and `set_enabled`.
- `loquat.router` — `StandardRouter`, which looks through a package's
  `blocks` → `groups` → `events` and routes on the first event carrying a
  `channel_id`, `group_id` or `user_id` (in that order of preference), picking
  the matching adapter from `RouterConfig` or falling back to the default one.
- `loquat.stream` — the abstract `Stream` and `StreamProcessor`, which passes
  packages through a sequence of `(pool_type, pool)` pairs; each pool must
  provide an async `process_batch(packages)`.
- `loquat.shutdown_stages` — `ShutdownStage`, `StageOutcome`,
  `ShutdownStageResult` and `ShutdownOrder`.
- `loquat.shutdown` — `ShutdownCoordinator` and `ShutdownStatus`: runs
  registered async handlers stage by stage, each under a timeout.
- `loquat.lru_cache` — `LruCache`, a fixed-capacity least-recently-used cache.
- `loquat.reload_history` — `HotReloadHistory` keeps the latest reload entries
  per plugin or adapter name, with `VersionData` for rollback and
  `HotReloadStats`.
- `loquat.error_handling` — `ErrorHandlingConfig`, `ErrorStats`,
  `log_and_raise`, `log_and_continue`, `retry_with_backoff` and
  `execute_with_error_handling`.
- `loquat.web_types` — `ApiResponse` and the health, plugin, adapter, reload and
  configuration payloads, plus the thread-safe `ErrorTracker`.
- `loquat.http_types` — `HttpMethod`, `HttpStatus`, `Request`, `Response` and
  `WebServiceConfig`.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

### LRU cache

```python
from loquat.lru_cache import LruCache

cache = LruCache(2)
cache.insert("a", 1)
cache.insert("b", 2)
cache.get("a")                 # "a" is now the most recently used
evicted = cache.insert("c", 3) # evicts "b", returns 2
```

### Routing

```python
from loquat.route_types import RouterConfig
from loquat.router import StandardRouter

config = RouterConfig().with_group_adapter("group_adapter").with_default_adapter("fallback")
router = StandardRouter(config=config)
router.determine_target("group:123")    # Adapter('group_adapter')
router.determine_target("private:42")   # Adapter('fallback')
```

`await router.route_package(package)` returns a `RouteResult` whose `state`
holds the chosen target and channel type.

### Graceful shutdown

```python
from loquat.shutdown import ShutdownCoordinator
from loquat.shutdown_stages import ShutdownOrder, ShutdownStage

async def stop_engine():
    ...

async def main():
    coordinator = ShutdownCoordinator()
    coordinator.register_handler(ShutdownStage.ENGINE, stop_engine)
    results = await coordinator.shutdown_with_order(ShutdownOrder.with_timeout(1000))
    for result in results:
        print(result)
```

Stages without a handler count as successful. A handler that raises is a
failed stage and one that overruns its timeout is a timed-out stage; neither
stops the remaining stages unless the order was built with
`ShutdownOrder().with_abort_on_failure()`.

### Retrying

```python
from loquat.error_handling import ErrorHandlingConfig, retry_with_backoff

config = ErrorHandlingConfig(max_retries=3, retry_delay_ms=10)
value = await retry_with_backoff(fetch, config, context="fetch data")
```

The exception of the last attempt is re-raised once `max_retries` attempts
have failed.

### HTTP helpers

```python
from loquat.http_types import HttpMethod, HttpStatus, Response

HttpMethod.parse("get")               # HttpMethod.GET
HttpStatus.NOT_FOUND.reason_phrase()  # "Not Found"
response = Response.json(HttpStatus.OK, {"message": "hello"})
```

## What it does not do

- It runs no web server and has no request handlers: the web modules only
  describe requests, responses, API payloads and settings.
- It provides no pools, worker classes or concrete streams; `StreamProcessor`
  and `StandardRouter` work with any objects of the shape described above.
- It has no command-line entry point.