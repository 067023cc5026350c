"""The RIOT chip: joystick and console switch ports plus the interval timer."""

from collections.abc import Callable, MutableSequence, Sequence
from enum import IntEnum

from .equates import Register

_TIMER_CLOCKS = {
    Register.T1024T: 1024,
    Register.TIM1T: 1,
    Register.TIM8T: 8,
    Register.TIM64T: 64,
}


class Input(IntEnum):
    """Positions of the controls within the input sequence given to ``Riot.set_input``."""

    JOY1_RIGHT = 0
    JOY1_LEFT = 1
    JOY1_DOWN = 2
    JOY1_UP = 3
    JOY1_BUTTON1 = 4
    JOY1_BUTTON2 = 5
    JOY2_RIGHT = 6
    JOY2_LEFT = 7
    JOY2_DOWN = 8
    JOY2_UP = 9
    JOY2_BUTTON1 = 10
    JOY2_BUTTON2 = 11
    RESET = 12
    SELECT = 13
    PAUSE = 14
    LEFT_DIFFICULTY = 15
    RIGHT_DIFFICULTY = 16


INPUT_COUNT = len(Input)

# Closed switches pull these bits of SWCHA and SWCHB to ground.
_SWCHA_BITS = (
    (Input.JOY1_RIGHT, 0x80),
    (Input.JOY1_LEFT, 0x40),
    (Input.JOY1_DOWN, 0x20),
    (Input.JOY1_UP, 0x10),
    (Input.JOY2_RIGHT, 0x08),
    (Input.JOY2_LEFT, 0x04),
    (Input.JOY2_DOWN, 0x02),
    (Input.JOY2_UP, 0x01),
)
_SWCHB_BITS = (
    (Input.RESET, 0x01),
    (Input.SELECT, 0x02),
    (Input.PAUSE, 0x08),
    (Input.LEFT_DIFFICULTY, 0x40),
    (Input.RIGHT_DIFFICULTY, 0x80),
)

# (SWCHB mode bit, button 1, button 2, legacy port, button 1 port, button 2 port)
_PLAYERS = (
    (0x04, Input.JOY1_BUTTON1, Input.JOY1_BUTTON2, Register.INPT4, Register.INPT1, Register.INPT0),
    (0x10, Input.JOY2_BUTTON1, Input.JOY2_BUTTON2, Register.INPT5, Register.INPT3, Register.INPT2),
)


class Riot:
    """Port and timer logic operating on the console's RAM.

    ``ram`` is the mutable byte array holding the hardware registers and
    ``write`` is the memory write routine used for the INTIM register.
    """

    def __init__(
        self,
        ram: MutableSequence[int],
        write: Callable[[int, int], None],
    ) -> None:
        self._ram = ram
        self._write = write
        self.timing = False
        self.timer = int(Register.TIM64T)
        self.intervals = 0
        self._dra = 0
        self._drb = 0
        self._elapsed = False
        self._current_time = 0
        self._clocks = 0

    def reset(self) -> None:
        """Clear the internal data direction registers."""
        self.set_dra(0)
        self.set_drb(0)

    def set_input(self, inputs: Sequence[object]) -> None:
        """Drive SWCHA, SWCHB and the button ports from the controls' states."""
        if len(inputs) < INPUT_COUNT:
            raise ValueError(f"expected {INPUT_COUNT} inputs, got {len(inputs)}")
        ram = self._ram

        swcha = (~ram[Register.CTLSWA] | self._dra) & 0xFF
        for control, mask in _SWCHA_BITS:
            if inputs[control]:
                swcha &= ~mask
        ram[Register.SWCHA] = swcha & 0xFF

        swchb = (~ram[Register.CTLSWB] | self._drb) & 0xFF
        for control, mask in _SWCHB_BITS:
            if inputs[control]:
                swchb &= ~mask
        ram[Register.SWCHB] = swchb & 0xFF

        for mode_bit, button1, button2, legacy, port1, port2 in _PLAYERS:
            if swchb & mode_bit:
                # One-button mode: only the legacy signal, active low.
                ram[port2] &= 0x7F
                ram[port1] &= 0x7F
                if inputs[button1] or inputs[button2]:
                    ram[legacy] &= 0x7F
                else:
                    ram[legacy] |= 0x80
            else:
                # Two-button mode: the new signals, active high.
                ram[legacy] |= 0x80
                if inputs[button1]:
                    ram[port1] |= 0x80
                else:
                    ram[port1] &= 0x7F
                if inputs[button2]:
                    ram[port2] |= 0x80
                else:
                    ram[port2] &= 0x7F

    def set_dra(self, data: int) -> None:
        """Store a value written to SWCHA in the internal DRA register."""
        self._dra = data & 0xFF

    def set_drb(self, data: int) -> None:
        """Store a value written to SWCHB in the internal DRB register."""
        self._drb = data & 0xFF

    def set_timer(self, timer: int, intervals: int) -> None:
        """Start the interval timer selected by the register address ``timer``."""
        self.timer = timer
        self.intervals = intervals & 0xFF
        clocks = _TIMER_CLOCKS.get(timer)
        if clocks is not None:
            self._clocks = clocks
            self.timing = True
        if self.timing:
            self._current_time = self._clocks * self.intervals
            self._elapsed = False

    def update_timer(self, cycles: int) -> None:
        """Advance the timer by ``cycles`` and refresh INTIM and INTFLG."""
        self._current_time -= cycles & 0xFF
        if not self._elapsed and self._current_time > 0:
            self._write(Register.INTIM, (self._current_time // self._clocks) & 0xFF)
        elif self._elapsed:
            if self._current_time >= -255:
                self._write(Register.INTIM, self._current_time & 0xFF)
            else:
                self._write(Register.INTIM, 0)
                self.timing = False
        else:
            self._current_time = self._clocks
            self._write(Register.INTIM, 0)
            self._ram[Register.INTFLG] |= 0x80
            self._elapsed = True