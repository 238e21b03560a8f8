from graphviz import Digraph

from parlex.base import Transition
from parlex.config import MAX_SYM, REJECT, START


def as_symbol(a):
    "Normalize a byte value, one-byte `bytes` or one-character `str` to an int."
    if isinstance(a, str):
        a = a.encode('latin-1') if len(a) == 1 and ord(a) <= MAX_SYM else None
    if isinstance(a, (bytes, bytearray)):
        a = a[0] if len(a) == 1 else None
    if not isinstance(a, int) or not 0 <= a <= MAX_SYM:
        raise ValueError(f'Symbol out of range 0..{MAX_SYM}')
    return a


class LexerDFA:
    """
    Deterministic lexer automaton over bytes.

    States are ints ``0 .. num_states()-1`` with ``START = 0``.  Each edge
    carries a ``produces_lexeme`` flag: taking it means the lexeme read so
    far is complete and a new one begins with the edge's symbol.  A state
    may be labelled with the lexeme it accepts.

    This is the interface that :class:`parlex.ParallelLexer` consumes:
    ``num_states()``, ``arcs(i)`` and ``lexeme(i)``.
    """

    def __init__(self, num_states=1):
        if num_states < 1:
            raise ValueError('Need at least the start state')
        self.edges = [dict() for _ in range(num_states)]
        self.lexemes = [None] * num_states
        self.syms = set()

    def num_states(self):
        return len(self.edges)

    def __len__(self):
        return len(self.edges)

    def add_state(self, lexeme=None):
        self.edges.append({})
        self.lexemes.append(lexeme)
        return len(self.edges) - 1

    def _check_state(self, i):
        if not (isinstance(i, int) and 0 <= i < len(self.edges)):
            raise ValueError(f'Unknown state {i!r}')

    def add(self, i, a, j, produces_lexeme=False):
        self._check_state(i)
        self._check_state(j)
        a = as_symbol(a)
        if a in self.edges[i]:
            raise ValueError(f'State {i} already has a transition on {a!r}; not deterministic')
        self.edges[i][a] = Transition(j, bool(produces_lexeme))
        self.syms.add(a)
        return self

    add_arc = add

    def set_lexeme(self, i, lexeme):
        self._check_state(i)
        self.lexemes[i] = lexeme
        return self

    def lexeme(self, i):
        if i == REJECT:
            return None
        return self.lexemes[i]

    def is_final(self, i):
        return self.lexeme(i) is not None

    def arcs(self, i=None):
        if i is None:
            for i in range(len(self.edges)):
                for a, (j, p) in self.edges[i].items():
                    yield (i, a, j, p)
        else:
            for a, (j, p) in self.edges[i].items():
                yield (a, j, p)

    def step(self, i, a):
        if i == REJECT:
            return Transition()
        return self.edges[i].get(as_symbol(a), Transition())

    def run(self, data, state=START):
        """Feed `data` through the automaton one symbol at a time.

        Returns the final :class:`Transition`; its flag is that of the last
        step only.  Empty input leaves the state unchanged.
        """
        t = Transition(state, False)
        for a in data:
            t = self.step(t.result_state, a)
        return t

    def __repr__(self):
        x = ['{']
        for s in range(len(self.edges)):
            ss = f'{s}'
            if s == START:
                ss = f'^{ss}'
            if self.lexemes[s] is not None:
                ss = f'{ss}$ ({self.lexemes[s]})'
            x.append(f'  {ss}:')
            for a, j, p in self.arcs(s):
                x.append(f'    {chr(a)!r} -> {j}' + (' !' if p else ''))
        x.append('}')
        return '\n'.join(x)

    def _repr_mimebundle_(self, *args, **kwargs):
        return self.graphviz()._repr_mimebundle_(*args, **kwargs)

    def graphviz(self, fmt_node=lambda x: x, fmt_sym=lambda a: repr(chr(a))):
        import html
        g = Digraph(
            graph_attr=dict(rankdir='LR'),
            node_attr=dict(
                fontname='Monospace',
                fontsize='8',
                height='.05',
                width='.05',
                margin="0.055,0.042",
                shape='box',
                style='rounded',
            ),
            edge_attr=dict(
                arrowsize='0.3',
                fontname='Monospace',
                fontsize='8'
            ),
        )

        start = '<start>'
        g.node(start, label='', shape='point', height='0', width='0')
        g.edge(start, str(START), label='')

        for i in range(len(self.edges)):
            label = html.escape(str(fmt_node(i)))
            if self.lexemes[i] is not None:
                label = f'{label}\n{html.escape(str(self.lexemes[i]))}'
            g.node(str(i), label=label, peripheries='2' if self.is_final(i) else '1')

        # One edge per (i, j, produces_lexeme) with stacked labels; edges that
        # close a lexeme are dashed.
        by_pair = {}
        for i, a, j, p in self.arcs():
            by_pair.setdefault((i, j, p), []).append(html.escape(str(fmt_sym(a))))
        for (i, j, p), labels in by_pair.items():
            g.edge(str(i), str(j), label='\n'.join(sorted(labels)),
                   style='dashed' if p else 'solid')

        return g
