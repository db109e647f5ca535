import singer
from singer import metrics, utils
from singer.utils import strptime_to_utc

from zoho_crm.paginator import Paginator
from zoho_crm.response import ResponseMode

LOGGER = singer.get_logger()
DEFAULT_START_DATE = "2010-01-01T00:00:00"
ZOHO_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def update_currently_syncing(state, stream_name=None):

    if (stream_name is None) and ("currently_syncing" in state):
        del state["currently_syncing"]
    else:
        singer.set_currently_syncing(state, stream_name)
    singer.write_state(state)


def write_record(stream_name, record, time_extracted):
    try:
        singer.write_record(stream_name, record, time_extracted=time_extracted)
    except OSError as err:
        LOGGER.error("Stream: {} - OS Error writing record".format(stream_name))
        LOGGER.error("record: {}".format(record))
        raise err


def get_bookmark(state, stream, default):
    # default only populated on initial sync
    if (state is None) or ("bookmarks" not in state):
        return default
    return state.get("bookmarks", {}).get(stream, default)


def write_bookmark(state, stream, value):
    if "bookmarks" not in state:
        state["bookmarks"] = {}
    state["bookmarks"][stream] = value
    LOGGER.info("Stream: {} - Write state, bookmark value: {}".format(stream, value))
    singer.write_state(state)


def update_bookmark(state, stream, value):
    if "bookmarks" not in state:
        state["bookmarks"] = {}
    state["bookmarks"][stream] = value


def fetch_module_records(client, descriptor, params):
    method = descriptor.sync_method
    if method == "getRecords":
        records = client.request(
            descriptor.name,
            method,
            params,
            paginate=True,
            response_mode=ResponseMode.RECORDS_ARRAY,
        )
        if isinstance(records, Paginator):
            records = records.fetch_all().records
        return records

    return client.request(descriptor.name, method, params, response_mode=ResponseMode.RECORDS_ARRAY)


def sync_module(client, descriptor, state, start_date):
    stream_name = descriptor.stream_name
    bookmark_key = descriptor.bookmark_key
    params = dict(descriptor.params)

    last_bookmark_value_dt = strptime_to_utc(get_bookmark(state, stream_name, start_date))
    bookmark_value_dt = None
    if bookmark_key:
        params["lastModifiedTime"] = last_bookmark_value_dt.strftime(ZOHO_DATETIME_FORMAT)

    with metrics.record_counter(stream_name) as counter:
        try:
            for record in fetch_module_records(client, descriptor, params) or []:
                if bookmark_key:
                    record_value_dt = strptime_to_utc(record[bookmark_key])
                    if record_value_dt < last_bookmark_value_dt:
                        raise RuntimeError(
                            f"out of order data seen!, last_bookmark_value: '{last_bookmark_value_dt}', new_book_mark_value: '{record_value_dt}', full record: {record}"
                        )
                    write_record(stream_name, record, time_extracted=utils.now())
                    bookmark_value_dt = last_bookmark_value_dt = record_value_dt
                    update_bookmark(state, stream_name, bookmark_value_dt.isoformat())
                else:
                    write_record(stream_name, record, time_extracted=utils.now())
                counter.increment()
        finally:
            if bookmark_key and bookmark_value_dt is not None:
                write_bookmark(state, stream_name, bookmark_value_dt.isoformat())


def sync(client, config, state):
    start_date = config.get("start_date") or DEFAULT_START_DATE

    for module_name in client.supported_modules:
        descriptor = client.get_module(module_name)
        if not descriptor.stream_name:
            LOGGER.info(f"skipping module {module_name}, it has no stream")
            continue

        update_currently_syncing(state, descriptor.stream_name)
        try:
            sync_module(client, descriptor, state, start_date)
        except Exception:
            LOGGER.exception(f"Error during sync of {descriptor.stream_name}")
            raise
        finally:
            update_currently_syncing(state)
