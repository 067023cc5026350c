"""Sound generation of the TIA chip."""

from dataclasses import dataclass

from .equates import Register

BUFFER_SIZE = 624
DEFAULT_SIZE = 524

_POLY4 = (1, 1, 0, 1, 1, 1, 0, 0, 0, 0, 1, 0, 1, 0, 0)
_POLY5 = (
    0, 0, 1, 0, 1, 1, 0, 0, 1, 1, 1, 1, 1, 0, 0, 0,
    1, 1, 0, 1, 1, 1, 0, 1, 0, 1, 0, 0, 0, 0, 1,
)
_POLY9 = (
    0, 0, 1, 0, 1, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 0, 1, 0, 1, 0, 0, 1, 1, 1, 1,
    1, 0, 0, 1, 1, 0, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1, 1, 0, 0, 1, 0, 0, 1, 1, 1, 1, 0, 1, 0, 0, 0, 0,
    1, 1, 0, 1, 1, 0, 0, 0, 1, 0, 0, 0, 1, 1, 1, 1, 0, 1, 0, 1, 1, 0, 1, 0, 1, 0, 0, 0, 0, 1, 1, 0,
    1, 0, 1, 0, 0, 0, 1, 0, 1, 0, 0, 0, 1, 1, 1, 0, 0, 1, 1, 0, 1, 1, 0, 0, 1, 1, 1, 1, 1, 0, 0, 1,
    1, 0, 0, 0, 1, 1, 0, 1, 0, 0, 0, 1, 1, 0, 0, 1, 1, 1, 1, 0, 0, 1, 0, 0, 0, 1, 1, 1, 0, 0, 1, 1,
    0, 1, 0, 1, 1, 0, 1, 1, 0, 1, 0, 0, 1, 0, 0, 1, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1, 0, 1, 1, 0, 0, 0,
    0, 1, 1, 1, 1, 1, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 1, 0, 1, 0, 1, 1, 0, 0, 0, 0, 1, 0, 1, 1,
    1, 1, 0, 1, 0, 0, 0, 1, 1, 0, 0, 0, 1, 1, 1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 1,
    0, 0, 1, 0, 0, 0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0, 1, 1, 0, 0, 1, 0, 0, 1, 0, 1, 1, 0, 0, 0,
    0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 1, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0, 0, 1, 0, 0, 1, 1, 1, 1, 0,
    1, 1, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1, 1, 1, 0, 1, 1, 0, 1, 0, 1, 1, 1, 1, 0, 0, 1, 0, 1, 0, 1, 1,
    1, 0, 0, 0, 0, 0, 1, 1, 0, 1, 1, 0, 0, 0, 1, 0, 1, 0, 1, 0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 0, 0, 0,
    1, 0, 0, 1, 0, 1, 0, 0, 0, 1, 0, 1, 1, 1, 0, 0, 1, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0, 1, 0, 0, 1,
    1, 0, 1, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 0, 1, 0, 0, 0, 1, 1, 0, 1, 0, 0, 0, 0, 0, 1, 1, 1, 1, 0,
    0, 1, 0, 0, 1, 0, 1, 1, 1, 1, 1, 1, 1, 0, 1, 0, 0, 1, 0, 0, 0, 1, 1, 0, 1, 1, 1, 0, 0, 0, 1, 0,
    1, 0, 0, 1, 0, 1, 0, 1, 0, 1, 1, 1, 0, 0, 1, 0, 1, 1, 0, 0, 1, 1, 1, 1, 1, 0, 0, 0, 1, 1, 0,
)
_DIV31 = (1,) + (0,) * 17 + (1,) + (0,) * 12

_REGISTERS = {
    Register.AUDC0: (0, "audc"),
    Register.AUDC1: (1, "audc"),
    Register.AUDF0: (0, "audf"),
    Register.AUDF1: (1, "audf"),
    Register.AUDV0: (0, "audv"),
    Register.AUDV1: (1, "audv"),
}


@dataclass
class _Channel:
    volume: int = 0
    counter_max: int = 0
    counter: int = 0
    audc: int = 0
    audf: int = 0
    audv: int = 0
    poly4: int = 0
    poly5: int = 0
    poly9: int = 0

    def step(self) -> None:
        """Advance the channel's waveform generator by one divided clock."""
        self.poly5 = (self.poly5 + 1) % len(_POLY5)
        audc = self.audc
        if (
            not audc & 2
            or (not audc & 1 and _DIV31[self.poly5])
            or (audc & 1 and _POLY5[self.poly5])
        ):
            if audc & 4:
                self.volume = 0 if self.volume else self.audv
            elif audc & 8:
                if audc == 8:
                    self.poly9 = (self.poly9 + 1) % len(_POLY9)
                    self.volume = self.audv if _POLY9[self.poly9] else 0
                else:
                    self.volume = self.audv if _POLY5[self.poly5] else 0
            else:
                self.poly4 = (self.poly4 + 1) % len(_POLY4)
                self.volume = self.audv if _POLY4[self.poly4] else 0

    def tick(self) -> None:
        """Count down one sample, stepping the generator when the count expires."""
        if self.counter > 1:
            self.counter -= 1
        elif self.counter == 1:
            self.counter = self.counter_max
            self.step()


class Tia:
    """Two-channel TIA sound generator writing samples into a ring buffer."""

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        if not 1 <= size <= BUFFER_SIZE:
            raise ValueError(f"size must be between 1 and {BUFFER_SIZE}, got {size}")
        self.size = size
        self.buffer = bytearray(BUFFER_SIZE)
        self._channels = (_Channel(), _Channel())
        self._sound_counter = 0

    def reset(self) -> None:
        """Return both channels to silence and clear the buffer."""
        self._sound_counter = 0
        self._channels = (_Channel(), _Channel())
        self.clear()

    def clear(self) -> None:
        """Zero every sample in the buffer."""
        self.buffer[:] = bytes(BUFFER_SIZE)

    def set_register(self, address: int, data: int) -> None:
        """Write an audio register; addresses other than AUDC/AUDF/AUDV are ignored."""
        target = _REGISTERS.get(address)
        if target is None:
            return
        index, field = target
        channel = self._channels[index]
        if field == "audc":
            channel.audc = data & 15
        elif field == "audf":
            channel.audf = data & 31
        else:
            channel.audv = (data & 15) << 2

        if channel.audc == 0:
            frequency = 0
            channel.volume = channel.audv
        else:
            frequency = channel.audf + 1
            if channel.audc > 11:
                frequency *= 3

        if frequency != channel.counter_max:
            channel.counter_max = frequency
            if channel.counter == 0 or frequency == 0:
                channel.counter = frequency

    def process(self, length: int) -> None:
        """Generate ``length`` samples into the ring buffer."""
        left, right = self._channels
        for _ in range(length):
            left.tick()
            right.tick()
            self.buffer[self._sound_counter] = left.volume + right.volume
            self._sound_counter += 1
            if self._sound_counter >= self.size:
                self._sound_counter = 0