from dataclasses import dataclass

@dataclass
class Settings:
    count: int = 4                # probes per run
    timeout_ms: int = 1000        # receive window per probe
    payload_size: int = 32
    payload_byte: bytes = b"w"
    identifier: int = 1           # constant for the whole run
    interval_s: float = 1.0       # target cadence between probe starts
    recv_buffer: int = 1024       # bytes read per reception (IP header included)

    def payload(self) -> bytes:
        return self.payload_byte * self.payload_size

    def validate(self) -> "Settings":
        if self.count <= 0:
            raise ValueError(f"count must be positive, got {self.count}")
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if self.payload_size < 0:
            raise ValueError(f"payload_size must not be negative, got {self.payload_size}")
        if self.interval_s < 0:
            raise ValueError(f"interval_s must not be negative, got {self.interval_s}")
        if len(self.payload_byte) != 1:
            raise ValueError("payload_byte must be exactly one byte")
        if not 0 <= self.identifier <= 0xFFFF:
            raise ValueError(f"identifier must fit in 16 bits, got {self.identifier}")
        if self.count > 0x10000:
            # sequence numbers are 16-bit and never wrap within a run
            raise ValueError(f"count must not exceed 65536, got {self.count}")
        return self
