import asyncio

import pytest

from helpers import make_connection
from stomp_client.core.network import join_host_port, split_host_port
from stomp_shared.protocol import AddressError, TransportError


@pytest.mark.parametrize(
    "address, expected",
    [
        ("broker.example:61613", ("broker.example", "61613")),
        ("127.0.0.1:80", ("127.0.0.1", "80")),
        ("[::1]:61613", ("::1", "61613")),
        ("[fe80::1%eth0]:1", ("fe80::1%eth0", "1")),
        (":61613", ("", "61613")),
    ],
)
def test_split_host_port(address, expected):
    assert split_host_port(address) == expected


@pytest.mark.parametrize(
    "address",
    ["", "broker.example", "::1:61613", "[::1]", "[::1", "[::1]x61613", "a]b:1"],
)
def test_split_host_port_rejects(address):
    with pytest.raises(AddressError):
        split_host_port(address)


def test_join_host_port():
    assert join_host_port("broker", 61613) == "broker:61613"
    assert join_host_port("::1", 61613) == "[::1]:61613"


def test_remote_address_from_peername():
    async def scenario():
        return [
            make_connection().remote_address,
            make_connection(peername=("::1", 5, 0, 0)).remote_address,
            make_connection(peername=None).remote_address,
            make_connection(peername="/tmp/broker.sock").remote_address,
        ]

    assert asyncio.run(scenario()) == ["broker.example:61613", "[::1]:5", "", "/tmp/broker.sock"]


def test_write_and_close():
    async def scenario():
        connection = make_connection()
        await connection.write(b"abc")
        await connection.close()
        await connection.close()
        with pytest.raises(TransportError):
            await connection.write(b"more")
        return connection

    connection = asyncio.run(scenario())

    assert connection.writer.buffer == bytearray(b"abc")
    assert connection.writer.closed
    assert connection.closed


def test_write_failure_is_transport_error():
    async def scenario():
        connection = make_connection(fail=BrokenPipeError("pipe"))
        with pytest.raises(TransportError) as excinfo:
            await connection.write(b"abc")
        return excinfo.value

    error = asyncio.run(scenario())

    assert isinstance(error.__cause__, BrokenPipeError)
