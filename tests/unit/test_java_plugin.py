"""
Tests for the Java declaration source and renderer.
"""

import textwrap

import pytest

from recordgen.config.models import AggregateKind, MemberKind
from recordgen.languages.java.plugin import JavaPlugin


@pytest.fixture
def plugin():
    return JavaPlugin()


@pytest.fixture
def user_source():
    return textwrap.dedent("""\
        package com.example;

        @Buildable
        public class User {
            private static final int MAX_AGE = 150;
            public String name;
            private final int age;
            int[] scores = {1, 2};

            public String greet() {
                return "Hello, " + name;
            }
        }
    """)


class TestExtractDeclarations:
    def test_class_fields(self, plugin, user_source):
        (declaration,) = plugin.extract_declarations(user_source, marker="Buildable")

        assert declaration.name == "User"
        assert declaration.kind == AggregateKind.REFERENCE
        assert declaration.modifiers == ("public",)
        assert declaration.access_modifier == "public"
        assert declaration.span.marker_start is not None

        members = {m.name: m for m in declaration.members}
        assert "static" in members["MAX_AGE"].modifiers
        assert members["name"].type == "String"
        assert members["name"].is_mutable
        assert members["age"].type == "int"
        assert not members["age"].is_mutable
        assert "private" in members["age"].modifiers
        assert members["scores"].type == "int[]"
        assert members["scores"].has_initializer
        assert members["greet"].kind == MemberKind.OTHER

    def test_generic_class(self, plugin):
        source = "class Box<T extends Comparable<T>> {\n    T item;\n}\n"
        (declaration,) = plugin.extract_declarations(source)
        assert declaration.type_parameters == ("T",)

    def test_other_kinds(self, plugin):
        source = "interface Shape {}\nenum Color { RED }\n"
        kinds = {d.name: d.kind for d in plugin.extract_declarations(source)}
        assert kinds == {"Shape": AggregateKind.OTHER, "Color": AggregateKind.OTHER}

    def test_unmarked_class_has_no_marker_span(self, plugin):
        (declaration,) = plugin.extract_declarations("class A {\n    int x;\n}\n", marker="Buildable")
        assert declaration.span.marker_start is None


class TestExpandSource:
    def test_public_class(self, plugin, user_source):
        result = plugin.expand_source(user_source)

        assert result.expanded == ["User"]
        assert "@Buildable" not in result.source
        assert "\npublic class User {" in result.source
        expected_tail = (
            "        return \"Hello, \" + name;\n"
            "    }\n"
            "\n"
            "    public User(String name, int age, int[] scores) {\n"
            "        this.name = name;\n"
            "        this.age = age;\n"
            "        this.scores = scores;\n"
            "    }\n"
            "\n"
            "    public User name(String value) {\n"
            "        return new User(value, age, scores);\n"
            "    }\n"
            "\n"
            "    public User scores(int[] value) {\n"
            "        return new User(name, age, value);\n"
            "    }\n"
            "}\n"
        )
        assert result.source.endswith(expected_tail)
        assert "User age(" not in result.source
        assert "MAX_AGE(" not in result.source

    def test_package_private_class(self, plugin):
        source = "@Buildable\nfinal class Point {\n    final double x;\n    final double y;\n}\n"
        expanded = plugin.expand_source(source).source
        assert expanded == textwrap.dedent("""\
            final class Point {
                final double x;
                final double y;

                Point(double x, double y) {
                    this.x = x;
                    this.y = y;
                }

                Point x(double value) {
                    return new Point(value, y);
                }

                Point y(double value) {
                    return new Point(x, value);
                }
            }
        """)

    def test_generic_class(self, plugin):
        source = "@Buildable\npublic class Box<T> {\n    private T item;\n    int size;\n}\n"
        expanded = plugin.expand_source(source).source
        assert "public Box(T item, int size) {" in expanded
        assert "public Box<T> size(int value) {\n        return new Box<>(item, value);\n    }" in expanded

    def test_field_named_like_parameter(self, plugin):
        source = "@Buildable\nclass Reading {\n    String unit;\n    double value;\n}\n"
        expanded = plugin.expand_source(source).source
        assert "return new Reading(value, this.value);" in expanded
        assert "return new Reading(unit, value);" in expanded

    def test_marked_interface_only_loses_marker(self, plugin):
        result = plugin.expand_source("@Buildable\ninterface Shape {\n}\n")
        assert result.source == "interface Shape {\n}\n"
        assert result.skipped == ["Shape"]

    def test_crlf_line_endings(self, plugin):
        source = "@Buildable\r\nclass P {\r\n    int x;\r\n}\r\n"
        expanded = plugin.expand_source(source).source
        assert expanded == (
            "class P {\r\n"
            "    int x;\r\n"
            "\r\n"
            "    P(int x) {\r\n"
            "        this.x = x;\r\n"
            "    }\r\n"
            "\r\n"
            "    P x(int value) {\r\n"
            "        return new P(value);\r\n"
            "    }\r\n"
            "}\r\n"
        )
