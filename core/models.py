from dataclasses import dataclass, field


@dataclass
class PasswordStrength:
    score: int  # 0 (very weak) .. 4 (very strong)
    feedback: list[str] = field(default_factory=list)
    is_common: bool = False
    crack_time: str = "Instant"


@dataclass
class PwnedResult:
    is_pwned: bool = False
    count: int = 0  # times the password appears in the breach corpus
