import sys
import time

from chip8vm import Interpreter, InterpreterConfig, Quirks, display_to_text


def digits_rom() -> bytes:
    """Draw the sixteen font glyphs in two rows, then spin."""
    opcodes = [
        0x00E0,  # 0x200: CLS
        0x6000,  # 0x202: V0 = x
        0x6100,  # 0x204: V1 = y
        0x6200,  # 0x206: V2 = digit
        0xF229,  # 0x208: I = glyph(V2)
        0xD015,  # 0x20A: draw at (V0, V1)
        0x7008,  # 0x20C: x += 8
        0x7201,  # 0x20E: digit += 1
        0x4208,  # 0x210: skip if digit != 8
        0x221A,  # 0x212: call newline
        0x4210,  # 0x214: skip if digit != 16
        0x1216,  # 0x216: spin
        0x1208,  # 0x218: next glyph
        0x6000,  # 0x21A: newline: x = 0
        0x6108,  # 0x21C: y = 8
        0x00EE,  # 0x21E: return
    ]
    return b"".join(opcode.to_bytes(2, "big") for opcode in opcodes)


if __name__ == "__main__":
    config = InterpreterConfig(quirks=Quirks.modern(), log_level="INFO")
    interpreter = Interpreter(config)

    if len(sys.argv) > 1:
        interpreter.load_file(sys.argv[1])
    else:
        interpreter.load(digits_rom(), source="built-in digits demo")

    start = time.time()
    interpreter.run(60, progress=True)
    elapsed = time.time() - start

    print(display_to_text(interpreter.state))
    print(f"{interpreter.cycles} cycles in {elapsed:.2f}s")
