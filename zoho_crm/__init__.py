#!/usr/bin/env python3

import singer
from zoho_crm.client import ClientPreferences, ZohoClient
from zoho_crm.response import ResponseMode
from zoho_crm.sync import sync


LOGGER = singer.get_logger()

REQUIRED_CONFIG_KEYS = [
    "auth_token",
]


@singer.utils.handle_top_exception(LOGGER)
def main():

    parsed_args = singer.utils.parse_args(REQUIRED_CONFIG_KEYS)

    config = parsed_args.config

    client = ZohoClient(
        config["auth_token"],
        modules=config.get("modules"),
        api_domain=config.get("api_domain"),
        timeout=config.get("timeout"),
        preferences=ClientPreferences(
            response_mode=ResponseMode.RECORDS_ARRAY,
            auto_fetch_paginated_requests=True,
        ),
    )

    state = {}
    if parsed_args.state:
        state = parsed_args.state

    sync(client=client, config=config, state=state)


if __name__ == "__main__":
    main()
