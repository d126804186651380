"""Prime number helpers used to size tables and compressors."""

from open_hashing.primes.oracle import DEFAULT_ORACLE, PrimeOracle

__all__ = ["DEFAULT_ORACLE", "PrimeOracle"]
