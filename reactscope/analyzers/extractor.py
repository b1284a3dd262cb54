"""Single-pass extraction of hooks, state, context and store usage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from tree_sitter import Node

from ..models import ContextInfo, HookInfo, StateInfo, StoreInfo
from .bindings import (
    binding_target,
    call_arguments,
    object_pattern_keys,
    render_binding,
    render_keys,
    render_literal,
    sequence_elements,
)
from .parser import SyntaxTree, position, walk
from .usage import count_usages, enclosing_scope

HOOK_PREFIX = "use"
STATE_HOOK = "useState"
CONTEXT_HOOK = "useContext"
DEPENDENCY_HOOKS = frozenset({"useEffect", "useMemo", "useCallback"})

ANONYMOUS_CALL = "Anonymous function call"
UNKNOWN_DEPENDENCY = "Unknown dependency"
ANONYMOUS_ARGUMENT = "Anonymous argument"
DISPATCH_MARKER = "dispatch"


@dataclass(frozen=True)
class StoreBinding:
    """How a store hook call contributes to a :class:`StoreInfo` bucket."""

    store: str
    bucket: str
    destructure: bool = False
    marker: Optional[str] = None


STORE_BINDINGS: Dict[str, StoreBinding] = {
    "useSelector": StoreBinding("redux", "selectors", destructure=True),
    "useDispatch": StoreBinding("redux", "actions", marker=DISPATCH_MARKER),
    "useRecoilState": StoreBinding("recoil", "selectors"),
    "useRecoilValue": StoreBinding("recoil", "selectors"),
    "useStore": StoreBinding("zustand", "selectors", destructure=True),
    "useAtom": StoreBinding("jotai", "selectors"),
}


@dataclass
class Extraction:
    """Facts collected from one file's traversal."""

    hooks: List[HookInfo] = field(default_factory=list)
    states: List[StateInfo] = field(default_factory=list)
    contexts: List[ContextInfo] = field(default_factory=list)
    store_usage: List[StoreInfo] = field(default_factory=list)


@dataclass
class _Accumulator:
    result: Extraction = field(default_factory=Extraction)
    hook_names: Set[str] = field(default_factory=set)
    contexts: Dict[str, ContextInfo] = field(default_factory=dict)
    stores: Dict[str, StoreInfo] = field(default_factory=dict)


class StructuralExtractor:
    """Classifies every call expression in a tree against the known hook vocabulary.

    With ``dedupe_hooks`` (the default) a hook name is recorded once per file,
    so repeated ``useState``/``useContext`` calls after the first contribute
    no further hooks, states or contexts. Disabling it records every call
    site and merges repeated contexts into one entry with several locations.
    """

    def __init__(self, *, dedupe_hooks: bool = True) -> None:
        self.dedupe_hooks = dedupe_hooks

    def extract(self, tree: SyntaxTree) -> Extraction:
        acc = _Accumulator()
        for node in walk(tree.root):
            if node.type != "call_expression":
                continue
            function = node.child_by_field_name("function")
            if function is None or function.type != "identifier":
                continue
            callee = tree.text(function)
            if callee.startswith(HOOK_PREFIX):
                self._record_hook(acc, tree, node, callee)
            binding = STORE_BINDINGS.get(callee)
            if binding is not None:
                self._record_store(acc, tree, node, binding)
        return acc.result

    # ------------------------------------------------------------------
    # Hooks

    def _record_hook(self, acc: _Accumulator, tree: SyntaxTree, call: Node, callee: str) -> None:
        if self.dedupe_hooks and callee in acc.hook_names:
            return
        acc.hook_names.add(callee)
        acc.result.hooks.append(build_hook_info(tree, call, callee))

        if callee == STATE_HOOK:
            state = extract_state(tree, call)
            if state is not None:
                acc.result.states.append(state)
        elif callee == CONTEXT_HOOK:
            context = extract_context(tree, call)
            if context is None:
                return
            existing = acc.contexts.get(context.name)
            if existing is None:
                acc.contexts[context.name] = context
                acc.result.contexts.append(context)
            elif not self.dedupe_hooks:
                existing.usage_locations.extend(context.usage_locations)

    # ------------------------------------------------------------------
    # Stores

    def _record_store(
        self, acc: _Accumulator, tree: SyntaxTree, call: Node, binding: StoreBinding
    ) -> None:
        if binding.marker is not None:
            entry = binding.marker
        else:
            entry = first_argument_name(tree, call)
            if binding.destructure:
                target = binding_target(call)
                if target is not None and target.type == "object_pattern":
                    keys = object_pattern_keys(tree, target)
                    if keys:
                        entry = f"{entry} -> {render_keys(keys)}"
        store = acc.stores.get(binding.store)
        if store is None:
            store = StoreInfo(type=binding.store)
            acc.stores[binding.store] = store
            acc.result.store_usage.append(store)
        store.add(binding.bucket, entry)


def build_hook_info(tree: SyntaxTree, call: Node, callee: str) -> HookInfo:
    hook = HookInfo(name=callee, call_location=position(call, tree.source))
    if callee in DEPENDENCY_HOOKS:
        arguments = call_arguments(call)
        if len(arguments) > 1 and arguments[1].type == "array":
            hook.dependencies = [
                dependency_name(tree, element) for element in sequence_elements(arguments[1])
            ]
    hook.value = render_binding(tree, binding_target(call))
    return hook


def dependency_name(tree: SyntaxTree, element: Optional[Node]) -> str:
    if element is None:
        return UNKNOWN_DEPENDENCY
    if element.type == "identifier":
        return tree.text(element)
    if element.type == "call_expression":
        function = element.child_by_field_name("function")
        if function is not None and function.type == "identifier":
            return tree.text(function)
        return ANONYMOUS_CALL
    return UNKNOWN_DEPENDENCY


def extract_state(tree: SyntaxTree, call: Node) -> Optional[StateInfo]:
    """Build a :class:`StateInfo` from ``const [value, setValue] = useState(...)``."""
    target = binding_target(call)
    if target is None or target.type != "array_pattern":
        return None
    elements = sequence_elements(target)
    if len(elements) < 2:
        return None
    value, setter = elements[0], elements[1]
    if value is None or value.type != "identifier":
        return None
    if setter is None or setter.type != "identifier":
        return None

    name = tree.text(value)
    initial_value: Optional[str] = None
    arguments = call_arguments(call)
    if arguments:
        initial_value = render_literal(tree, arguments[0])

    return StateInfo(
        name=name,
        setter=tree.text(setter),
        initial_value=initial_value,
        usage_count=count_usages(tree, enclosing_scope(call), name),
    )


def extract_context(tree: SyntaxTree, call: Node) -> Optional[ContextInfo]:
    """Build a :class:`ContextInfo` from ``useContext(SomeContext)``."""
    arguments = call_arguments(call)
    if len(arguments) != 1 or arguments[0].type != "identifier":
        return None
    context_name = tree.text(arguments[0])
    return ContextInfo(
        name=context_name,
        usage_locations=[position(call, tree.source)],
        value=context_value(tree, binding_target(call), context_name),
    )


def context_value(tree: SyntaxTree, target: Optional[Node], context_name: str) -> str:
    if target is not None:
        if target.type == "identifier":
            return f"{tree.text(target)} (from {context_name})"
        if target.type == "object_pattern":
            keys = object_pattern_keys(tree, target)
            if keys:
                return f"{render_keys(keys)} (from {context_name})"
    return f"from {context_name}"


def first_argument_name(tree: SyntaxTree, call: Node) -> str:
    arguments = call_arguments(call)
    if arguments and arguments[0].type == "identifier":
        return tree.text(arguments[0])
    return ANONYMOUS_ARGUMENT


__all__ = [
    "ANONYMOUS_ARGUMENT",
    "DISPATCH_MARKER",
    "Extraction",
    "STORE_BINDINGS",
    "StoreBinding",
    "StructuralExtractor",
]
