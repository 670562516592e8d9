"""Client login handshake for RPC brokers."""

from rpc_handshake.errors import AuthenticationRejectedError as AuthenticationRejectedError
from rpc_handshake.errors import EncodingError as EncodingError
from rpc_handshake.errors import HandshakeError as HandshakeError
from rpc_handshake.errors import ProtocolViolationError as ProtocolViolationError
from rpc_handshake.errors import TransportError as TransportError
from rpc_handshake.handshake import Handshake as Handshake
from rpc_handshake.handshake import HandshakeState as HandshakeState
from rpc_handshake.handshake import login as login
from rpc_handshake.login_params import LoginParams as LoginParams
from rpc_handshake.login_params import LoginType as LoginType
from rpc_handshake.login_params import Scheme as Scheme
from rpc_handshake.protocol import RpcMessage as RpcMessage
