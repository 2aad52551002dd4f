from pychip8.cpu import RegisterFile
from pychip8.utils.trace import TraceRecorder


def _registers(**kwargs) -> RegisterFile:
    registers = RegisterFile()
    for index, value in kwargs.pop("v", {}).items():
        registers.write_v(index, value)
    for name, value in kwargs.items():
        setattr(registers, name, value)
    return registers


def test_trace_recorder_overwrites_old_entries():
    recorder = TraceRecorder(capacity=2)

    recorder.record_step(0x200, 0x6005, _registers(v={0: 0x05}), listing="LD V0, 0x05")
    recorder.record_step(0x202, 0x6103, _registers(v={1: 0x03}), listing="LD V1, 0x03")
    recorder.record_step(0x204, 0xF30A, _registers(i=0x300), listing="LD V3, K", awaiting_key=True, note="wait")

    lines = list(recorder.format_entries())
    assert len(recorder) == 2
    assert len(lines) == 2
    assert "pc=202" in lines[0]
    assert "pc=204" in lines[1]
    assert "I=300" in lines[1]
    assert "flags=KEY,wait" in lines[1]


def test_trace_recorder_handles_missing_word():
    recorder = TraceRecorder(1)
    recorder.record_step(0xFFF, None, _registers(), halted=True, note="halted")

    lines = list(recorder.format_entries())
    assert len(lines) == 1
    assert "op=----" in lines[0]
    assert "flags=HALT,halted" in lines[0]


def test_trace_lists_registers_and_limit():
    recorder = TraceRecorder(4)
    for step in range(3):
        recorder.record_step(0x200 + step * 2, 0x7001, _registers(v={0: step}), listing="ADD V0, 0x01")

    lines = list(recorder.format_entries(limit=1))
    assert len(lines) == 1
    assert "V=[02 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00]" in lines[0]
    assert recorder.last_entry().pc == 0x204

    recorder.clear()
    assert recorder.last_entry() is None
