"""Tests for hook, state, context and store extraction."""

from __future__ import annotations

import textwrap

from reactscope.analyzers.extractor import (
    ANONYMOUS_ARGUMENT,
    DISPATCH_MARKER,
    Extraction,
    StructuralExtractor,
)
from reactscope.analyzers.parser import parse_source
from reactscope.models import Location


def _extract(source: str, *, dedupe_hooks: bool = True) -> Extraction:
    tree = parse_source(textwrap.dedent(source).lstrip("\n"), "Component.tsx")
    return StructuralExtractor(dedupe_hooks=dedupe_hooks).extract(tree)


def test_counter_state_and_hook() -> None:
    result = _extract(
        """
        import { useState } from "react";

        export function Counter() {
          const [count, setCount] = useState(0);
          return <button onClick={() => setCount(count + 1)}>{count}</button>;
        }
        """
    )

    assert [hook.name for hook in result.hooks] == ["useState"]
    hook = result.hooks[0]
    assert hook.call_location == Location(line=4, column=28)
    assert hook.value == "[count, setCount]"
    assert hook.dependencies is None

    assert len(result.states) == 1
    state = result.states[0]
    assert state.name == "count"
    assert state.setter == "setCount"
    assert state.initial_value == "0"
    assert state.usage_count == 2


def test_call_location_column_counts_characters() -> None:
    result = _extract(
        """
        function Greeting() {
          const s = "한국어"; const [a, setA] = useState(0);
          return <p>{s}{a}</p>;
        }
        """
    )

    assert result.hooks[0].call_location == Location(line=2, column=37)


def test_string_initial_value_is_quoted() -> None:
    result = _extract(
        """
        function Greeting() {
          const [text, setText] = useState("hi");
          return <p>{text}</p>;
        }
        """
    )

    assert result.states[0].initial_value == '"hi"'


def test_non_literal_initial_value_is_omitted() -> None:
    result = _extract(
        """
        function Greeting({ initial }) {
          const [text, setText] = useState(initial);
          const [items, setItems] = useState();
          return null;
        }
        """,
        dedupe_hooks=False,
    )

    assert [state.initial_value for state in result.states] == [None, None]


def test_state_requires_two_identifier_array_binding() -> None:
    result = _extract(
        """
        function Odd() {
          const state = useState(0);
          return null;
        }
        """
    )

    assert [hook.name for hook in result.hooks] == ["useState"]
    assert result.hooks[0].value == "state"
    assert result.states == []


def test_dependency_arrays() -> None:
    result = _extract(
        """
        function Profile({ id, api }) {
          useEffect(() => {}, [id, api]);
          const total = useMemo(() => id * 2, [getId(), api.fetch(), props.value, , id]);
          const handler = useCallback(() => {}, []);
          useLayoutEffect(() => {});
          return null;
        }
        """
    )

    deps = {hook.name: hook.dependencies for hook in result.hooks}
    assert deps["useEffect"] == ["id", "api"]
    assert deps["useMemo"] == [
        "getId",
        "Anonymous function call",
        "Unknown dependency",
        "Unknown dependency",
        "id",
    ]
    assert deps["useCallback"] == []
    assert deps["useLayoutEffect"] is None


def test_effect_without_dependency_array_has_no_dependencies() -> None:
    result = _extract(
        """
        function Ticker() {
          useEffect(() => {});
          return null;
        }
        """
    )

    assert result.hooks[0].dependencies is None


def test_repeated_hooks_are_recorded_once_by_default() -> None:
    source = """
    function Form() {
      const [first, setFirst] = useState("");
      const [last, setLast] = useState("");
      return null;
    }
    """

    deduped = _extract(source)
    assert [hook.name for hook in deduped.hooks] == ["useState"]
    assert [state.name for state in deduped.states] == ["first"]

    every_call = _extract(source, dedupe_hooks=False)
    assert [hook.name for hook in every_call.hooks] == ["useState", "useState"]
    assert [state.name for state in every_call.states] == ["first", "last"]


def test_custom_hooks_are_recorded() -> None:
    result = _extract(
        """
        function Page() {
          const { data } = useQuery(key);
          const navigate = useNavigate();
          React.useRef(null);
          return null;
        }
        """
    )

    assert [(hook.name, hook.value) for hook in result.hooks] == [
        ("useQuery", "{ data }"),
        ("useNavigate", "navigate"),
    ]


def test_context_value_shapes() -> None:
    result = _extract(
        """
        function Header() {
          const theme = useContext(ThemeContext);
          const { user, logout } = useContext(AuthContext);
          useContext(LocaleContext);
          useContext();
          useContext(getContext());
          return null;
        }
        """,
        dedupe_hooks=False,
    )

    assert len(result.hooks) == 5
    assert [(context.name, context.value) for context in result.contexts] == [
        ("ThemeContext", "theme (from ThemeContext)"),
        ("AuthContext", "{ user, logout } (from AuthContext)"),
        ("LocaleContext", "from LocaleContext"),
    ]
    assert result.contexts[0].usage_locations == [Location(line=2, column=16)]
    assert result.contexts[0].type is None


def test_repeated_context_merges_locations_when_not_deduplicated() -> None:
    source = """
    function Header() {
      const theme = useContext(ThemeContext);
      const again = useContext(ThemeContext);
      return null;
    }
    """

    merged = _extract(source, dedupe_hooks=False)
    assert len(merged.contexts) == 1
    assert [location.line for location in merged.contexts[0].usage_locations] == [2, 3]

    deduped = _extract(source)
    assert len(deduped.contexts) == 1
    assert len(deduped.contexts[0].usage_locations) == 1


def test_redux_selector_destructuring_and_dispatch() -> None:
    result = _extract(
        """
        function UserPanel() {
          const { user, loading } = useSelector(state => state.user);
          const theme = useSelector(selectTheme);
          const dispatch = useDispatch();
          return null;
        }
        """
    )

    assert len(result.store_usage) == 1
    redux = result.store_usage[0]
    assert redux.type == "redux"
    assert redux.selectors == [f"{ANONYMOUS_ARGUMENT} -> {{ user, loading }}", "selectTheme"]
    assert redux.actions == [DISPATCH_MARKER]
    assert result.hooks[0].value == "{ user, loading }"


def test_store_entries_are_unique() -> None:
    result = _extract(
        """
        function Totals() {
          const a = useSelector(selectTotal);
          const b = useSelector(selectTotal);
          return null;
        }
        """
    )

    assert result.store_usage[0].selectors == ["selectTotal"]


def test_other_store_libraries() -> None:
    result = _extract(
        """
        function Dashboard() {
          const [todos, setTodos] = useRecoilState(todoListState);
          const filter = useRecoilValue(filterState);
          const { bears } = useStore(bearStore);
          const [count, setCount] = useAtom(countAtom);
          return null;
        }
        """
    )

    stores = {store.type: store for store in result.store_usage}
    assert list(stores) == ["recoil", "zustand", "jotai"]
    assert stores["recoil"].selectors == ["todoListState", "filterState"]
    assert stores["zustand"].selectors == ["bearStore -> { bears }"]
    assert stores["jotai"].selectors == ["countAtom"]
    assert all(store.actions == [] for store in result.store_usage)


def test_plain_file_yields_nothing() -> None:
    result = _extract(
        """
        export function format(value) {
          return String(value).trim();
        }
        """
    )

    assert result == Extraction()
