from collections.abc import Mapping


MIN_INDEX = 1
PAGE_MAX_SIZE = 200


class ParameterSet(Mapping):
    """Ordered URL parameters sent with every request.

    ``extend`` is the only operation used on the dispatch path: it returns a new
    set and leaves the receiver untouched, so a set captured by a ``Request``
    never changes. ``set``/``unset`` exist for the client-level defaults.
    """

    def __init__(self, params=None):
        self._params = dict(params or {})

    @classmethod
    def with_defaults(
        cls,
        scope="crmapi",
        new_format=1,
        version=2,
        from_index=MIN_INDEX,
        to_index=PAGE_MAX_SIZE,
        **extra,
    ):
        params = {
            "scope": scope,
            "newFormat": new_format,
            "version": version,
            "fromIndex": from_index,
            "toIndex": to_index,
        }
        params.update(extra)
        return cls(params)

    def extend(self, other):
        params = dict(self._params)
        params.update(other or {})
        return ParameterSet(params)

    def get(self, key, default=None):
        return self._params.get(key, default)

    def set(self, key, value):
        self._params[key] = value

    def unset(self, key):
        self._params.pop(key, None)

    def to_dict(self):
        return dict(self._params)

    def __getitem__(self, key):
        return self._params[key]

    def __iter__(self):
        return iter(self._params)

    def __len__(self):
        return len(self._params)

    def __eq__(self, other):
        if isinstance(other, Mapping):
            return self._params == dict(other)
        return NotImplemented

    def __repr__(self):
        return f"ParameterSet({self._params!r})"
