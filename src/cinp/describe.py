""" Typed representations of the result of a DESCRIBE request. The same
    :class:`Describe` class is used for namespaces, models, and actions; the
    fields that do not apply to the described thing are left empty, and the
    ``Type`` response header says which kind of thing it is.
"""


class FieldParameter:
    """ A model field, a list filter parameter, or an action parameter or
        return type. Unknown keys in the wire data are ignored.
    """

    # Attribute name, wire name, default factory.

    _wire = (
        ('name', 'name', str),
        ('doc', 'doc', str),
        ('path', 'path', str),
        ('type', 'type', str),
        ('length', 'length', int),
        ('uri', 'uri', str),
        ('allowed_schemes', 'allowed_schemes', list),
        ('choices', 'choices', list),
        ('is_array', 'is_array', bool),
        ('default', 'default', lambda: None),
        ('mode', 'mode', str),
        ('required', 'required', bool),
    )

    def __init__(self, **kwargs):

        for attribute, wire, default in self._wire:
            try:
                value = kwargs.pop(attribute)
            except KeyError:
                value = default()

            setattr(self, attribute, value)

        if kwargs:
            raise TypeError('unexpected arguments: ' + ', '.join(sorted(kwargs)))


    def __eq__(self, other):

        if isinstance(other, type(self)):
            return vars(self) == vars(other)

        return NotImplemented


    def __repr__(self):
        return '%s(%r)' % (type(self).__name__, self.name)


    @classmethod
    def from_dict(cls, data):
        """ Build an instance from the decoded JSON *data*. A value of None
            is treated the same as an empty dictionary.
        """

        if data is None:
            data = dict()

        kwargs = dict()
        for attribute, wire, default in cls._wire:
            try:
                value = data[wire]
            except KeyError:
                continue

            if value is None:
                continue

            kwargs[attribute] = value

        return cls(**kwargs)


# end of class FieldParameter



class Describe(FieldParameter):
    """ The description of a namespace, model, or action. """

    _wire = (
        ('name', 'name', str),
        ('doc', 'doc', str),
        ('path', 'path', str),

        # Namespace
        ('api_version', 'api-version', str),
        ('multi_uri_max', 'multi-uri-max', int),
        ('namespaces', 'namespaces', list),
        ('models', 'models', list),

        # Model
        ('constants', 'constants', dict),
        ('fields', 'fields', list),
        ('actions', 'actions', list),
        ('not_allowed_methods', 'not-allowed-methods', list),
        ('list_filters', 'list-filters', dict),

        # Action. The protocol spells it 'paramaters'.
        ('return_type', 'return-type', lambda: None),
        ('static', 'static', bool),
        ('parameters', 'paramaters', list),
    )

    @classmethod
    def from_dict(cls, data):

        # The nested structures arrive as plain dictionaries.

        result = super(Describe, cls).from_dict(data)

        result.fields = [FieldParameter.from_dict(item) for item in result.fields]
        result.parameters = [FieldParameter.from_dict(item) for item in result.parameters]

        list_filters = dict()
        for name, parameters in result.list_filters.items():
            list_filters[name] = [FieldParameter.from_dict(item) for item in parameters or ()]
        result.list_filters = list_filters

        if result.return_type is not None:
            result.return_type = FieldParameter.from_dict(result.return_type)

        return result


# end of class Describe


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
