"""
Core components: Expression tree and node constructors
"""

import math
from enum import Enum
from typing import Callable, Dict, Optional, Set


# ============================================================================
# EXPRESSION SYSTEM
# ============================================================================

class Op(Enum):
    """All supported operators."""
    ADD = 0
    SUB = 1
    MUL = 2
    DIV = 3
    POW = 4
    NEG = 5
    VAR_X = 6
    VAR_Y = 7
    VAR_Z = 8
    CONST = 9
    SIN = 21
    COS = 22
    TAN = 23
    LN = 24
    EXP = 25
    SQRT = 26
    ABS = 27
    ASIN = 29
    ACOS = 30
    ATAN = 31


VARIABLES = {'x': Op.VAR_X, 'y': Op.VAR_Y, 'z': Op.VAR_Z}

FUNCTIONS = {
    'sqrt': Op.SQRT,
    'sin': Op.SIN,
    'cos': Op.COS,
    'tan': Op.TAN,
    'exp': Op.EXP,
    'log': Op.LN,
    'ln': Op.LN,
    'abs': Op.ABS,
    'asin': Op.ASIN,
    'acos': Op.ACOS,
    'atan': Op.ATAN,
}

CONSTANTS = {'pi': math.pi, 'e': math.e}

# Deepest tree the closure compiler accepts; evaluation recurses once per level.
MAX_DEPTH = 300

BINARY_OPS: Dict[Op, Callable[[float, float], float]] = {
    Op.ADD: lambda a, b: a + b,
    Op.SUB: lambda a, b: a - b,
    Op.MUL: lambda a, b: a * b,
    Op.DIV: lambda a, b: a / b,
    Op.POW: math.pow,
}

UNARY_OPS: Dict[Op, Callable[[float], float]] = {
    Op.NEG: lambda a: -a,
    Op.SIN: math.sin,
    Op.COS: math.cos,
    Op.TAN: math.tan,
    Op.LN: math.log,
    Op.EXP: math.exp,
    Op.SQRT: math.sqrt,
    Op.ABS: abs,
    Op.ASIN: math.asin,
    Op.ACOS: math.acos,
    Op.ATAN: math.atan,
}

_FUNCTION_NAMES = {
    Op.SIN: 'sin', Op.COS: 'cos', Op.TAN: 'tan', Op.LN: 'ln', Op.EXP: 'exp',
    Op.SQRT: 'sqrt', Op.ABS: 'abs', Op.ASIN: 'asin', Op.ACOS: 'acos', Op.ATAN: 'atan',
}
_SYMBOLS = {Op.ADD: '+', Op.SUB: '-', Op.MUL: '*', Op.DIV: '/'}


class Expr:
    """Expression tree node."""

    def __init__(self, op: Op, value: float = 0.0,
                 left: 'Expr' = None, right: 'Expr' = None):
        self.op = op
        self.value = value
        self.left = left
        self.right = right

    def __repr__(self):
        if self.op == Op.CONST:
            v = self.value
            return str(int(round(v))) if abs(v - round(v)) < 1e-9 else f"{v:.6g}"
        elif self.op == Op.VAR_X: return "x"
        elif self.op == Op.VAR_Y: return "y"
        elif self.op == Op.VAR_Z: return "z"
        elif self.op in _SYMBOLS: return f"({self.left} {_SYMBOLS[self.op]} {self.right})"
        elif self.op == Op.POW: return f"({self.left}^{self.right})"
        elif self.op == Op.NEG: return f"(-{self.left})"
        elif self.op in _FUNCTION_NAMES: return f"{_FUNCTION_NAMES[self.op]}({self.left})"
        return "?"

    def depth(self) -> int:
        """Height of the tree, counted without recursion."""
        deepest = 0
        stack = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, level + 1))
        return deepest

    def variables(self) -> Set[str]:
        """Names of the free variables referenced by this tree."""
        names = set()
        def traverse(node: Optional['Expr']):
            if node is None:
                return
            for name, op in VARIABLES.items():
                if node.op == op:
                    names.add(name)
            traverse(node.left)
            traverse(node.right)
        traverse(self)
        return names

    def evaluate(self, x_val: float = 0.0, y_val: float = 0.0, z_val: float = 0.0) -> float:
        """
        Numerically evaluate by walking the tree.

        Domain faults propagate as ValueError / ArithmeticError exactly as
        the math module raises them.
        """
        if self.op == Op.CONST: return self.value
        elif self.op == Op.VAR_X: return x_val
        elif self.op == Op.VAR_Y: return y_val
        elif self.op == Op.VAR_Z: return z_val
        elif self.op in BINARY_OPS:
            return BINARY_OPS[self.op](self.left.evaluate(x_val, y_val, z_val),
                                       self.right.evaluate(x_val, y_val, z_val))
        return UNARY_OPS[self.op](self.left.evaluate(x_val, y_val, z_val))


# ============================================================================
# CONSTRUCTORS
# ============================================================================

def Const(v): return Expr(Op.CONST, value=float(v))
def Add(l, r): return Expr(Op.ADD, left=l, right=r)
def Sub(l, r): return Expr(Op.SUB, left=l, right=r)
def Mul(l, r): return Expr(Op.MUL, left=l, right=r)
def Div(l, r): return Expr(Op.DIV, left=l, right=r)
def Pow(b, e): return Expr(Op.POW, left=b, right=e)
def Neg(e): return Expr(Op.NEG, left=e)
def Func(op, e): return Expr(op, left=e)
