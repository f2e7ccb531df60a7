def parse_attributes(attrs):
    """ Convert PAPI attributes (scalar or sequence values) to the list-valued form SATOSA expects """
    if attrs is None:
        return {}
    parsed = {}
    for name, value in attrs.items():
        if isinstance(value, (list, tuple)):
            parsed[name] = list(value)
        else:
            parsed[name] = [value]
    return parsed
