"""
Fixed Point — Checked uint256 арифметика

Все количества (балансы, reserve, цены, объём) — целые числа без знака
в диапазоне [0, UINT256_MAX], масштабированные фиксированным числом
дробных разрядов (DECIMALS).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ни одна операция не "заворачивается" (wrap): выход за диапазон → исключение
2. Деление всегда floor (целочисленное), округление только вниз
3. Деление на ноль никогда не происходит (возвращается fallback)
4. Все операции детерминированы и воспроизводимы
"""

from typing import Final

from bondledger.core.errors import ArithmeticOverflow, ArithmeticUnderflow, InvalidAmount

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Верхняя граница беззнакового 256-битного целого
UINT256_MAX: Final[int] = (1 << 256) - 1

# Число дробных разрядов единицы учёта
DECIMALS: Final[int] = 18

# Масштаб одной целой единицы: 10**DECIMALS
WAD: Final[int] = 10**DECIMALS


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_uint256(value: object) -> bool:
    """
    Проверка, что значение — int в диапазоне uint256.

    bool явно исключается (в Python bool является подклассом int).
    """
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= UINT256_MAX
    )


def validate_uint256(value: object, name: str) -> int:
    """
    Валидация суммы, пришедшей извне.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        InvalidAmount: Если value не int, отрицательное или > UINT256_MAX
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidAmount(f"{name} must be an integer, got {type(value).__name__}")

    if value < 0:
        raise InvalidAmount(f"{name} must be non-negative, got {value}")

    if value > UINT256_MAX:
        raise InvalidAmount(f"{name} exceeds uint256 range, got {value}")

    return value


def validate_positive_int(value: object, name: str) -> None:
    """
    Валидация положительной константы конфигурации.

    Raises:
        ValueError: Если value не int или value <= 0
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


# =============================================================================
# CHECKED ARITHMETIC
# =============================================================================


def checked_add(a: int, b: int) -> int:
    """
    Сложение с проверкой переполнения.

    Raises:
        ArithmeticOverflow: Если a + b > UINT256_MAX
    """
    result = a + b
    if result > UINT256_MAX:
        raise ArithmeticOverflow(f"uint256 overflow: {a} + {b}")
    return result


def checked_sub(a: int, b: int) -> int:
    """
    Вычитание с проверкой отрицательного результата.

    Raises:
        ArithmeticUnderflow: Если b > a
    """
    if b > a:
        raise ArithmeticUnderflow(f"uint256 underflow: {a} - {b}")
    return a - b


def checked_mul(a: int, b: int) -> int:
    """
    Умножение с проверкой переполнения.

    Raises:
        ArithmeticOverflow: Если a * b > UINT256_MAX
    """
    result = a * b
    if result > UINT256_MAX:
        raise ArithmeticOverflow(f"uint256 overflow: {a} * {b}")
    return result


def floor_div(numerator: int, denominator: int, fallback: int = 0) -> int:
    """
    Целочисленное деление с округлением вниз.

    Деление на ноль не выполняется: возвращается fallback.

    Examples:
        >>> floor_div(7, 2)
        3
        >>> floor_div(7, 0)
        0
    """
    if denominator == 0:
        return fallback
    return numerator // denominator


def mul_div(a: int, b: int, denominator: int, fallback: int = 0) -> int:
    """
    floor(a * b / denominator) с проверкой переполнения промежуточного
    произведения.

    Raises:
        ArithmeticOverflow: Если a * b > UINT256_MAX
    """
    return floor_div(checked_mul(a, b), denominator, fallback=fallback)
