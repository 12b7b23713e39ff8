"""
Expression compiler: text -> cached, directly callable evaluator.
"""

import logging
from collections import OrderedDict
from typing import Callable, Hashable, Optional, Sequence, Tuple

from .core import Expr, Op, BINARY_OPS, UNARY_OPS
from .errors import CompileError
from .parser import ExpressionParser

logger = logging.getLogger(__name__)

# f(x, y, z) -> float
NumericFn = Callable[[float, float, float], float]


class LRUCache:
    """Fixed-capacity mapping that evicts the least recently used entry."""

    def __init__(self, capacity: int = 256):
        self.capacity = max(1, capacity)
        self._data: OrderedDict = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable):
        if key in self._data:
            self._data.move_to_end(key)
            self.hits += 1
            return self._data[key]
        self.misses += 1
        return None

    def put(self, key: Hashable, value):
        self._data[key] = value
        self._data.move_to_end(key)
        while len(self._data) > self.capacity:
            evicted, _ = self._data.popitem(last=False)
            logger.debug(f"Evicted compiled expression {evicted!r}")

    def clear(self):
        self._data.clear()

    def __contains__(self, key):
        return key in self._data

    def __len__(self):
        return len(self._data)


def _compile_node(node: Expr) -> NumericFn:
    """Fold an expression tree into nested closures, once."""
    if node.op == Op.CONST:
        value = node.value
        return lambda x, y, z: value
    if node.op == Op.VAR_X:
        return lambda x, y, z: x
    if node.op == Op.VAR_Y:
        return lambda x, y, z: y
    if node.op == Op.VAR_Z:
        return lambda x, y, z: z
    if node.op in BINARY_OPS:
        fn = BINARY_OPS[node.op]
        left, right = _compile_node(node.left), _compile_node(node.right)
        return lambda x, y, z: fn(left(x, y, z), right(x, y, z))
    fn = UNARY_OPS[node.op]
    arg = _compile_node(node.left)
    return lambda x, y, z: fn(arg(x, y, z))


class CompiledEvaluator:
    """
    Pure mapping (x, y[, z]) -> float derived from one expression.

    Calling it may raise ValueError / ArithmeticError for points outside
    the function's domain; FunctionEvaluator turns those into undefined
    results.
    """

    def __init__(self, source: str, tree: Expr, variables: Tuple[str, ...]):
        self.source = source
        self.tree = tree
        self.variables = variables
        self._fn = _compile_node(tree)

    def __call__(self, x: float, y: float, z: float = 0.0) -> float:
        return self._fn(x, y, z)

    def __repr__(self):
        return f"CompiledEvaluator({self.source!r} -> {self.tree})"


class ExpressionCompiler:
    """Compile expression text, memoizing by (text, variables)."""

    def __init__(self, cache_size: int = 256, cache: Optional[LRUCache] = None):
        self.cache = cache if cache is not None else LRUCache(cache_size)

    def compile(self, text: str, variables: Sequence[str] = ('x', 'y')) -> CompiledEvaluator:
        key = (text, tuple(variables))
        compiled = self.cache.get(key)
        if isinstance(compiled, CompileError):
            raise compiled
        if compiled is not None:
            return compiled

        try:
            try:
                tree = ExpressionParser(variables).parse(text)
                compiled = CompiledEvaluator(text, tree, tuple(variables))
            except RecursionError:
                raise CompileError("Expression nested too deeply", text) from None
        except CompileError as e:
            # failures are memoized as well
            logger.debug(f"Compile failed for {text!r}: {e}")
            self.cache.put(key, e)
            raise

        self.cache.put(key, compiled)
        return compiled
