"""Minimal synchronous client for the RESP key-value protocol."""

from mini_resp.command import Cmd as Cmd
from mini_resp.command import cmd as cmd
from mini_resp.command import execute as execute
from mini_resp.connection import Connection as Connection
from mini_resp.connection import Transport as Transport
from mini_resp.connection import connect as connect
from mini_resp.errors import ClientConnectionError as ClientConnectionError
from mini_resp.errors import ClientError as ClientError
from mini_resp.errors import ClientTimeoutError as ClientTimeoutError
from mini_resp.errors import EncodeError as EncodeError
from mini_resp.errors import IncompleteFrameError as IncompleteFrameError
from mini_resp.errors import ProtocolError as ProtocolError
from mini_resp.protocol import decode as decode
from mini_resp.protocol import encode_command as encode_command
from mini_resp.values import Array as Array
from mini_resp.values import BulkString as BulkString
from mini_resp.values import Error as Error
from mini_resp.values import Integer as Integer
from mini_resp.values import SimpleString as SimpleString
from mini_resp.values import Value as Value
