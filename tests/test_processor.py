import asyncio
import logging

import pytest

from helpers import make_connection, wire
from stomp_client.core import connect
from stomp_client.core.processor import process
from stomp_shared.protocol import Command, FrameReader


def test_unhandled_frames_are_queued():
    async def scenario():
        connection = make_connection(wire(Command.MESSAGE, b"one", destination="/queue/a"))
        processor = process(connection, FrameReader(connection.reader))
        frame = await asyncio.wait_for(processor.receive(), timeout=1)
        await processor.wait_closed()
        return processor, frame

    processor, frame = asyncio.run(scenario())

    assert frame.body.read() == b"one"
    assert processor.last_received is not None
    assert not processor.running


def test_registered_handler_receives_frames():
    async def scenario():
        received = []

        async def on_receipt(frame):
            received.append(frame.header("receipt-id"))

        connection = make_connection(wire(Command.RECEIPT, receipt_id="9"))
        processor = process(connection, FrameReader(connection.reader))
        processor.register_handler(Command.RECEIPT, on_receipt)
        await processor.wait_closed()
        return received

    assert asyncio.run(scenario()) == ["9"]


def test_handler_errors_do_not_stop_processing(caplog):
    async def scenario():
        async def broken(frame):
            raise RuntimeError("handler bug")

        data = wire(Command.MESSAGE, b"1") + wire(Command.MESSAGE, b"2")
        connection = make_connection(data)
        processor = process(connection, FrameReader(connection.reader))
        processor.register_handler("MESSAGE", broken)
        await processor.wait_closed()
        return processor

    with caplog.at_level(logging.ERROR):
        asyncio.run(scenario())

    assert caplog.text.count("Handler error for MESSAGE") == 2


def test_error_frames_are_logged_and_queued(caplog):
    async def scenario():
        connection = make_connection(wire(Command.ERROR, message="queue full"))
        processor = process(connection, FrameReader(connection.reader))
        return await asyncio.wait_for(processor.receive(), timeout=1)

    with caplog.at_level(logging.WARNING):
        frame = asyncio.run(scenario())

    assert frame.command == Command.ERROR
    assert "queue full" in caplog.text


def test_malformed_frame_stops_processor(caplog):
    async def scenario():
        connection = make_connection(b"MESSAGE\nbroken\n\n\x00")
        processor = process(connection, FrameReader(connection.reader))
        await processor.wait_closed()
        return processor

    with caplog.at_level(logging.ERROR):
        processor = asyncio.run(scenario())

    assert not processor.running
    assert "Malformed frame" in caplog.text


def test_stop_cancels_pending_read():
    async def scenario():
        connection = make_connection(eof=False)
        processor = process(connection, FrameReader(connection.reader))
        await asyncio.sleep(0)
        assert processor.running
        await processor.stop()
        await processor.stop()
        return processor

    assert not asyncio.run(scenario()).running


def test_processor_reads_frames_after_handshake():
    async def scenario():
        data = wire(Command.CONNECTED, version="1.2") + wire(Command.MESSAGE, b"payload")
        session = await connect(make_connection(data, eof=False))
        frame = await asyncio.wait_for(session.processor.receive(), timeout=1)
        await session.close()
        return session, frame

    session, frame = asyncio.run(scenario())

    assert frame.body.read() == b"payload"
    assert not session.processor.running
    assert session.connection.closed


def test_wait_closed_honours_caller_timeout():
    async def scenario():
        connection = make_connection(eof=False)
        processor = process(connection, FrameReader(connection.reader))
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(processor.wait_closed(), timeout=0.05)
        still_running = processor.running
        await processor.stop()
        return still_running

    assert asyncio.run(scenario())


def test_full_inbox_drops_new_frames():
    async def scenario():
        data = wire(Command.MESSAGE, b"1") + wire(Command.MESSAGE, b"2") + wire(Command.MESSAGE, b"3")
        connection = make_connection(data)
        processor = process(connection, FrameReader(connection.reader), inbox_size=1)
        await processor.wait_closed()
        return processor, await processor.receive()

    processor, frame = asyncio.run(scenario())

    assert frame.body.read() == b"1"
    assert processor.dropped == 2


def test_client_only_commands_from_broker_are_ignored(caplog):
    async def scenario():
        data = wire(Command.SEND, b"x", destination="/queue/a") + wire(Command.RECEIPT, receipt_id="1")
        connection = make_connection(data)
        processor = process(connection, FrameReader(connection.reader))
        return await asyncio.wait_for(processor.receive(), timeout=1)

    with caplog.at_level(logging.WARNING):
        frame = asyncio.run(scenario())

    assert frame.command == Command.RECEIPT
    assert "Ignoring client-only SEND frame" in caplog.text
