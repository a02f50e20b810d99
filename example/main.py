import asyncio
import logging

import aiohttp

import typed_http

logging.basicConfig(level="DEBUG")


async def main() -> None:
    async with aiohttp.ClientSession() as client_session:
        transport = typed_http.setup(
            client_session=client_session,
            timeout=20,
            default_headers={"User-Agent": "typed-http-example"},
        )

        requests = [
            typed_http.get("https://httpbin.org/get", query_parameters={"a": "b"}),
            typed_http.post_json("https://httpbin.org/anything", {"name": "Arthur", "age": 42}),
            typed_http.post_form("https://httpbin.org/anything", [("name", "Arthur"), ("age", "42")]),
            typed_http.Request(path="/no-host"),
        ]
        for result in await asyncio.gather(*(transport.submit(r) for r in requests)):
            match result:
                case typed_http.Success(response):
                    print(result.request, response.status.code, response.message)
                case typed_http.Failure(error):
                    print(result.request, error.code)


asyncio.run(main())
