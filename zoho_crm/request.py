from enum import Enum

from zoho_crm.parameters import ParameterSet


class ResponseFormat(Enum):
    JSON = "json"
    XML = "xml"


class Request:
    """Everything needed to issue one call: format, module, method and parameters."""

    __slots__ = ("_format", "_module", "_method", "_parameters")

    def __init__(self, format, module, method, parameters):
        object.__setattr__(self, "_format", ResponseFormat(format))
        object.__setattr__(self, "_module", module)
        object.__setattr__(self, "_method", method)
        if not isinstance(parameters, ParameterSet):
            parameters = ParameterSet(parameters)
        object.__setattr__(self, "_parameters", parameters)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def format(self):
        return self._format

    @property
    def module(self):
        return self._module

    @property
    def method(self):
        return self._method

    @property
    def parameters(self):
        # ParameterSet.set would otherwise let callers reach into a captured set
        return ParameterSet(self._parameters)

    def with_parameters(self, params):
        return Request(self._format, self._module, self._method, self._parameters.extend(params))

    def __eq__(self, other):
        if not isinstance(other, Request):
            return NotImplemented
        return (self._format, self._module, self._method, self._parameters) == (
            other._format,
            other._module,
            other._method,
            other._parameters,
        )

    def __repr__(self):
        return f"Request({self._format.value}, {self._module}/{self._method}, {self._parameters.to_dict()!r})"
