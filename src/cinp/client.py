""" The :class:`Client` is the principal entry point for interacting with a
    CInP server. It wraps a :class:`cinp.transport.http.Session` with the
    named resource operations (get, list, create, update, delete, call) and
    enforces the single/multi object expectations of each one.
"""

import logging

from . import config
from .address import URI
from .describe import Describe
from .errors import MultiplicityMismatch, SerializationError, UnhandledStatus
from .objects import Object, Registry
from .protocol import fields
from .stream import ListStream
from .transport.http import Session


class Client:
    """ A client for the CInP server at *host* (for example
        ``https://server.example.com``), serving its API from *root_path*
        (for example ``/api/v1/``). The optional *proxy* is used for both
        http and https requests. The *timeout*, in seconds, applies to each
        individual request and defaults to :func:`cinp.config.timeout`.

        Every operation accepts an optional *cancel* keyword argument, a
        :class:`cinp.cancel.Token`; cancelling the token aborts the request.
    """

    def __init__(self, host, root_path, proxy=None, logger=None, timeout=None):

        if logger is None:
            logger = logging.getLogger(__name__)

        self.log = logger
        self.uri = URI(root_path)
        self.session = Session(host, proxy=proxy, timeout=timeout, log=logger)
        self.registry = Registry()

        self.log.info('New client %s', host)


    def __enter__(self):
        return self


    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


    def __repr__(self):
        return 'cinp.Client(%r, %r)' % (self.host, self.uri.root_path)


    @property
    def host(self):
        return self.session.host


    @property
    def headers(self):
        """ The default headers sent with every request. """

        return self.session.headers


    def close(self):
        self.session.close()


    def set_header(self, name, value):
        """ Set a header to be sent with every subsequent request, typically
            the AuthId and AuthToken headers once logged in.
        """

        self.session.set_header(name, value)


    def clear_header(self, name):
        self.session.clear_header(name)


    def register_type(self, uri, factory):
        """ Decode objects fetched from the model at *uri* with *factory*
            instead of :class:`cinp.objects.MappedObject`. See
            :func:`cinp.objects.Registry.register`.
        """

        self.registry.register(uri, factory)


    def request(self, verb, uri, data=None, decode=False, headers=None, cancel=None):
        """ Issue a raw *verb* against *uri* and return the
            :class:`cinp.protocol.response.Outcome`. The named operations
            below are built on this; use it directly for verbs they do not
            cover.
        """

        return self.session.request(verb, uri, data, decode, headers, cancel)


    def _expect(self, outcome, status, verb):

        if outcome.status != status:
            raise UnhandledStatus(outcome.status, verb)


    def describe(self, uri, cancel=None):
        """ Describe the namespace, model, or action at *uri*. Returns a
            tuple of the :class:`cinp.describe.Describe` instance and the
            type of the described thing, as indicated by the server.
        """

        self.log.info('DESCRIBE %s', uri)

        outcome = self.request(fields.DESCRIBE, uri, decode=True, cancel=cancel)
        self._expect(outcome, 200, fields.DESCRIBE)

        return Describe.from_dict(outcome.value), outcome.headers[fields.TYPE]


    def list(self, uri, filter_name=None, filter_values=None, position=0, count=None, cancel=None):
        """ Retrieve one page of object addresses from the model at *uri*,
            starting from *position* and at most *count* long. If a
            *filter_name* is provided, the *filter_values* are its
            arguments.

            Returns a tuple of (addresses, position, count, total) where the
            last three are as reported by the server, which may have
            adjusted the requested values.
        """

        if count is None:
            count = config.chunk_size()

        if position < 0 or count < 0:
            raise ValueError('position and count must be greater than 0')

        headers = dict()
        headers[fields.POSITION] = str(position)
        headers[fields.COUNT] = str(count)

        if filter_name:
            headers[fields.FILTER] = filter_name

        if filter_values is None:
            filter_values = dict()

        self.log.info('LIST %s', uri)

        outcome = self.request(fields.LIST, uri, filter_values, True, headers, cancel)
        self._expect(outcome, 200, fields.LIST)

        items = outcome.value
        if items is None:
            items = list()
        elif isinstance(items, list):
            pass
        else:
            raise SerializationError('expected a list of addresses, got ' + type(items).__name__)

        position = outcome.integer(fields.POSITION)
        count = outcome.integer(fields.COUNT)
        total = outcome.integer(fields.TOTAL)

        return items, position, count, total


    def _pages(self, uri, filter_name, filter_values, chunk_size, cancel, publish):
        """ Walk every page of the list. The *publish* callable is invoked
            with each page of addresses and returns False if the consumer
            has gone away.
        """

        position = 0
        total = 1

        while position < total:
            items, position, count, total = self.list(uri, filter_name, filter_values, position, chunk_size, cancel)

            if publish(items) == False:
                return

            if count <= 0:
                # The server is not advancing; asking again would loop
                # forever.
                break

            position += count


    def list_ids(self, uri, filter_name=None, filter_values=None, chunk_size=None, cancel=None, strict=False):
        """ Stream every object address in the model at *uri*, fetching
            *chunk_size* addresses per request. Returns a
            :class:`cinp.stream.ListStream`; see that class for how errors
            are reported, and the meaning of *strict*.
        """

        if chunk_size is None or chunk_size < 1:
            chunk_size = config.chunk_size()

        def producer(send, token):

            def publish(items):
                for item in items:
                    if not send(item):
                        return False
                return True

            self._pages(uri, filter_name, filter_values, chunk_size, token, publish)

        return ListStream(producer, cancel, strict)


    def list_objects(self, uri, filter_name=None, filter_values=None, chunk_size=None, cancel=None, strict=False):
        """ Stream every object in the model at *uri*. This is the same as
            :func:`list_ids`, except that each object is retrieved in full
            with :func:`get`, one request per object.
        """

        if chunk_size is None or chunk_size < 1:
            chunk_size = config.chunk_size()

        def producer(send, token):

            def publish(items):
                for id in self.extract_ids(items):
                    instance = self.get(self.update_ids(uri, [id]), cancel=token)
                    if not send(instance):
                        return False
                return True

            self._pages(uri, filter_name, filter_values, chunk_size, token, publish)

        return ListStream(producer, cancel, strict)


    def get(self, uri, cancel=None):
        """ Retrieve the single object at *uri*. If the server indicates the
            response covers multiple objects
            :class:`cinp.errors.MultiplicityMismatch` is raised.
        """

        self.log.info('GET %s', uri)

        outcome = self.request(fields.GET, uri, decode=True, cancel=cancel)
        self._expect(outcome, 200, fields.GET)

        if outcome.multi:
            raise MultiplicityMismatch('detected multi object')

        instance = self.registry.new(uri)
        instance.decode(outcome.value)

        return instance


    def get_multi(self, uri, cancel=None):
        """ Retrieve the objects at *uri*, which normally lists multiple ids.
            Returns a dictionary of address to object.
        """

        headers = {fields.MULTI_OBJECT: fields.TRUE}

        self.log.info('GET(multi) %s', uri)

        outcome = self.request(fields.GET, uri, None, True, headers, cancel)
        self._expect(outcome, 200, fields.GET)

        if not outcome.multi:
            raise MultiplicityMismatch('no multi result detected')

        return self._objects(outcome.value)


    def _objects(self, value):

        if value is None:
            value = dict()

        if isinstance(value, dict):
            pass
        else:
            raise SerializationError('expected a map of address to object, got ' + type(value).__name__)

        result = dict()
        for uri, data in value.items():
            instance = self.registry.new(uri)
            instance.decode(data)
            result[uri] = instance

        return result


    def create(self, uri, values, cancel=None):
        """ Create a new object in the model at *uri*. The *values* are
            either an :class:`cinp.objects.Object` instance or a dictionary
            of field values. Returns the object, with its :attr:`uri` set to
            the address of the newly created object and its fields updated
            with any values returned by the server.
        """

        if isinstance(values, Object):
            instance = values
        else:
            instance = self.registry.new(uri)
            instance.uri = None
            instance.decode(values)

        self.log.info('CREATE %s', uri)

        outcome = self.request(fields.CREATE, uri, instance.encode(), decode=True, cancel=cancel)
        self._expect(outcome, 201, fields.CREATE)

        object_id = outcome.headers[fields.OBJECT_ID]

        if object_id:
            ids = self.uri.parse(object_id).ids
        else:
            ids = None

        if ids is None or len(ids) != 1:
            raise MultiplicityMismatch('Create did not create any/one object')

        if outcome.value is not None:
            instance.decode(outcome.value)

        instance.uri = object_id
        return instance


    def update(self, instance, field_list=None, cancel=None):
        """ Send the field values of *instance* to the server. If *field_list*
            is provided, only those fields are sent. The values the server
            returns are applied back to the instance, which is returned.
        """

        uri = instance.uri

        if not uri:
            raise ValueError('cannot update an object without an address')

        self.log.info('UPDATE %s', uri)

        outcome = self.request(fields.UPDATE, uri, instance.encode(field_list), decode=True, cancel=cancel)
        self._expect(outcome, 200, fields.UPDATE)

        if outcome.multi:
            raise MultiplicityMismatch('detected multi object')

        if outcome.value is not None:
            instance.decode(outcome.value)

        return instance


    def update_multi(self, uri, values, cancel=None):
        """ Apply the same field *values* to every object at *uri*. Returns
            a dictionary of address to updated object.
        """

        headers = {fields.MULTI_OBJECT: fields.TRUE}

        self.log.info('UPDATE(multi) %s', uri)

        outcome = self.request(fields.UPDATE, uri, values, True, headers, cancel)
        self._expect(outcome, 200, fields.UPDATE)

        if not outcome.multi:
            raise MultiplicityMismatch('no multi result detected')

        return self._objects(outcome.value)


    def delete(self, instance, cancel=None):
        """ Delete the remote object represented by *instance*. """

        uri = instance.uri

        if not uri:
            raise ValueError('cannot delete an object without an address')

        self.delete_uri(uri, cancel)


    def delete_uri(self, uri, cancel=None):
        """ Delete the object, or objects, at *uri*. """

        self.log.info('DELETE %s', uri)

        outcome = self.request(fields.DELETE, uri, cancel=cancel)
        self._expect(outcome, 200, fields.DELETE)


    def call(self, uri, args=None, cancel=None):
        """ Invoke the action at *uri*, which includes the action name, with
            the keyword *args* dictionary. Returns the decoded result.
        """

        if args is None:
            args = dict()

        self.log.info('CALL %s', uri)

        outcome = self.request(fields.CALL, uri, args, decode=True, cancel=cancel)
        self._expect(outcome, 200, fields.CALL)

        if outcome.multi:
            raise MultiplicityMismatch('detected multi object')

        return outcome.value


    def call_multi(self, uri, args=None, cancel=None):
        """ Invoke the action at *uri* against every object it names. Returns
            a dictionary of object address to that object's result.
        """

        if args is None:
            args = dict()

        headers = {fields.MULTI_OBJECT: fields.TRUE}

        self.log.info('CALL(multi) %s', uri)

        outcome = self.request(fields.CALL, uri, args, True, headers, cancel)
        self._expect(outcome, 200, fields.CALL)

        if not outcome.multi:
            raise MultiplicityMismatch('no multi result detected')

        result = outcome.value

        if result is None:
            result = dict()
        elif isinstance(result, dict):
            pass
        else:
            raise SerializationError('expected a map of address to result, got ' + type(result).__name__)

        return result


    # Address helpers, bound to this client's root path.

    def build(self, namespace=None, model='', action='', ids=None):
        return self.uri.build(namespace, model, action, ids)


    def extract_ids(self, uri_list):
        return self.uri.extract_ids(uri_list)


    def split(self, uri):
        return self.uri.split(uri)


    def update_ids(self, uri, ids):
        return self.uri.update_ids(uri, ids)


# end of class Client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
