"""
IoC应用上下文测试
IoC Application Context Tests

日期: 2026-10-18
描述: 测试容器的核心功能：单例池、原型创建、字段注入、生命周期回调、后置处理器链和错误传播
"""

import logging
import threading
import time

import pytest

from minioc import (
    ApplicationContext, BeanCreationError, BeanDefinition, CircularDependencyError,
    ContainerError, DependencyResolutionError, DiscoveryError, InstantiationError,
    NoSuchBeanError, component_scan
)
from ioc_fixtures import journal


class TestSingletonAndPrototype:
    """作用域测试"""

    def test_singleton_identity(self, make_context):
        """测试单例两次获取是同一个实例"""
        context = make_context("ioc_fixtures.basic")

        for name in ("service_a", "service_b", "named_bean", "nested_bean"):
            assert context.get_bean(name) is context.get_bean(name)

    def test_prototype_instances_are_distinct(self, make_context):
        """测试原型五次获取得到五个独立注入的实例"""
        context = make_context("ioc_fixtures.basic")
        service_a = context.get_bean("service_a")
        service_b = context.get_bean("service_b")

        tasks = [context.get_bean("task") for _ in range(5)]

        assert len({id(task) for task in tasks}) == 5
        for task in tasks:
            assert task.service_b is service_b
            assert task.helper is service_a
            assert task.post_processed is True

    def test_prototype_not_created_at_startup(self, make_context):
        context = make_context("ioc_fixtures.basic")
        processor, = context.bean_post_processors

        assert ("before", "task") not in processor.events
        assert "task" not in context.get_beans_of_type(object)

        context.get_bean("task")
        assert processor.events[-2:] == [("before", "task"), ("after", "task")]

    def test_unknown_bean(self, make_context):
        """测试未注册名称"""
        context = make_context("ioc_fixtures.basic")

        with pytest.raises(NoSuchBeanError) as exc_info:
            context.get_bean("no_such_bean")

        assert exc_info.value.bean_name == "no_such_bean"
        # 容器本身不受影响
        assert context.get_bean("service_a") is not None


class TestDependencyInjection:
    """字段注入测试"""

    def test_field_equals_get_bean(self, make_context):
        """测试注入字段等于按字段名获取的Bean"""
        context = make_context("ioc_fixtures.basic")

        for name in context.get_bean_definition_names():
            definition = context.get_bean_definition(name)
            if not definition.is_singleton:
                continue
            bean = context.get_bean(name)
            for point in definition.injection_points:
                assert getattr(bean, point.field_name) is context.get_bean(point.bean_name)

    def test_post_processor_and_two_services_scenario(self, make_context):
        """测试后置处理器 + service_a依赖service_b的场景"""
        context = make_context("ioc_fixtures.basic")
        processor, = context.bean_post_processors

        service_a = context.get_bean("service_a")
        service_b = context.get_bean("service_b")

        assert service_a.service_b is service_b
        assert ("after", "service_a") in processor.events
        assert service_a.post_processed is True
        assert context.get_beans_of_type(type(service_a)) == {"service_a": service_a}

    def test_dependency_created_on_demand_once(self, make_context):
        """测试被依赖的单例只创建一次"""
        context = make_context("ioc_fixtures.basic")
        processor, = context.bean_post_processors

        assert processor.events.count(("before", "service_b")) == 1
        assert processor.events.count(("after", "service_b")) == 1

    def test_missing_dependency(self):
        """测试依赖的Bean未注册"""

        @component_scan("ioc_fixtures.missing_dependency")
        class Config:
            pass

        with pytest.raises(DependencyResolutionError) as exc_info:
            ApplicationContext(Config)

        error = exc_info.value
        assert error.bean_name == "orphan"
        assert error.dependency_name == "ghost"
        assert isinstance(error.__cause__, NoSuchBeanError)

    def test_circular_dependency_detected(self, make_context):
        """测试循环依赖快速失败"""
        with pytest.raises(CircularDependencyError) as exc_info:
            make_context("ioc_fixtures.cycle")

        assert exc_info.value.chain == ["cycle_a", "cycle_b", "cycle_a"]
        assert "cycle_a -> cycle_b -> cycle_a" in str(exc_info.value)


class TestInstantiation:

    def test_singleton_constructor_failure_aborts_startup(self, make_context):
        with pytest.raises(InstantiationError) as exc_info:
            make_context("ioc_fixtures.exploding")

        assert exc_info.value.bean_name == "exploding"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_prototype_without_no_arg_constructor(self, make_context):
        """测试原型Bean没有无参构造时错误传给调用方"""
        context = make_context("ioc_fixtures.bad_constructor")

        with pytest.raises(InstantiationError) as exc_info:
            context.get_bean("needs_args")

        assert exc_info.value.bean_name == "needs_args"
        assert isinstance(exc_info.value.__cause__, TypeError)


class TestLifecycleCallbacks:
    """生命周期回调测试"""

    def test_name_aware_then_initializing(self, make_context):
        """测试名称回调在初始化回调之前，且都在注入之后"""
        context = make_context("ioc_fixtures.basic")
        bean = context.get_bean("named_bean")

        assert bean.bean_name == "named_bean"
        assert bean.callbacks == ["set_bean_name", "after_properties_set"]
        assert bean.saw_dependency is True

    def test_init_failure_is_logged_not_raised(self, make_context, caplog):
        """测试初始化回调失败只记录日志，Bean仍然进入单例池"""
        with caplog.at_level(logging.ERROR, logger="minioc.context"):
            context = make_context("ioc_fixtures.basic")

        bean = context.get_bean("flaky_bean")
        assert bean.attempted is True
        # 初始化失败后仍然执行了初始化后的处理
        assert bean.post_processed is True
        assert "Initialization callback of bean 'flaky_bean' failed: boom" in caplog.text
        assert any(record.exc_info for record in caplog.records)


class TestPostProcessorChain:
    """后置处理器链测试"""

    def test_hook_order_and_before_substitution(self, make_context):
        """测试钩子按注册顺序执行，初始化前的替换对后续处理器和初始化回调可见"""
        context = make_context("ioc_fixtures.chain")
        target = context.get_bean("target")

        assert type(target).__name__ == "SubstituteTarget"
        assert type(target.original).__name__ == "Target"
        assert journal.entries[-5:] == [
            ("first", "before", "target", "Target"),
            ("second", "before", "target", "SubstituteTarget"),
            ("init", "SubstituteTarget"),
            ("first", "after", "target", "SubstituteTarget"),
            ("second", "after", "target", "SubstituteTarget"),
        ]

    def test_post_processor_beans_go_through_hooks(self, make_context):
        """测试后置处理器自身的Bean也经过所有处理器的钩子"""
        make_context("ioc_fixtures.chain")

        assert journal.entries[:8] == [
            ("first", "before", "first_processor", "FirstProcessor"),
            ("second", "before", "first_processor", "FirstProcessor"),
            ("first", "after", "first_processor", "FirstProcessor"),
            ("second", "after", "first_processor", "FirstProcessor"),
            ("first", "before", "second_processor", "SecondProcessor"),
            ("second", "before", "second_processor", "SecondProcessor"),
            ("first", "after", "second_processor", "SecondProcessor"),
            ("second", "after", "second_processor", "SecondProcessor"),
        ]

    def test_post_processor_bean_is_created_by_container(self, make_context):
        """测试单例池中的后置处理器按创建流程生成，处理器列表保留扫描时的实例"""
        context = make_context("ioc_fixtures.basic")

        listed, = context.bean_post_processors
        pooled = context.get_bean("recording_post_processor")

        assert type(pooled) is type(listed)
        assert pooled is not listed
        assert pooled is context.get_bean("recording_post_processor")
        assert pooled.post_processed is True
        assert listed.events[:2] == [
            ("before", "recording_post_processor"),
            ("after", "recording_post_processor"),
        ]
        # 池中的实例不参与处理
        assert pooled.events == []

    def test_post_processor_autowired_field(self, make_context):
        """测试后置处理器的注入字段等于按字段名获取的Bean"""
        context = make_context("ioc_fixtures.autowired_processor")

        processor = context.get_bean("auditing_processor")
        assert processor.helper is context.get_bean("helper")

        listed, = context.bean_post_processors
        assert listed.seen == ["helper", "auditing_processor"]

    def test_wrapper_substitution_for_singleton_and_prototype(self, make_context):
        """测试初始化后替换的包装对象对单例和原型都生效"""
        context = make_context("ioc_fixtures.proxy")

        greeter = context.get_bean("greeter")
        assert type(greeter).__name__ == "GreeterWrapper"
        assert greeter is context.get_bean("greeter")
        assert greeter.greet("world") == "HELLO WORLD!"

        first = context.get_bean("prototype_greeter")
        second = context.get_bean("prototype_greeter")
        assert type(first).__name__ == "GreeterWrapper"
        assert first is not second
        assert first.target is not second.target
        assert first.target.punctuation is context.get_bean("punctuation")

        # 未匹配的Bean不被包装
        assert type(context.get_bean("punctuation")).__name__ == "Punctuation"

    def test_failing_hook_raises_creation_error(self, make_context):
        context = make_context("ioc_fixtures.failing_hook")

        with pytest.raises(BeanCreationError) as exc_info:
            context.get_bean("fragile")

        assert exc_info.value.bean_name == "fragile"
        assert "FailingProcessor" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestContainerConstruction:

    def test_config_class(self):
        """测试使用@component_scan配置类启动"""

        @component_scan("ioc_fixtures.proxy")
        class Config:
            pass

        with ApplicationContext(Config) as context:
            assert context.config.scan_packages == ["ioc_fixtures.proxy"]
            assert "greeter" in context
            assert context.contains_bean("punctuation")
            assert not context.contains_bean("ghost")

    def test_config_class_without_marker(self):
        class NotAConfig:
            pass

        with pytest.raises(DiscoveryError):
            ApplicationContext(NotAConfig)

    def test_invalid_config_type(self):
        with pytest.raises(TypeError):
            ApplicationContext("ioc_fixtures.basic")

    def test_unknown_package_aborts_startup(self, make_context):
        with pytest.raises(DiscoveryError):
            make_context("ioc_fixtures.nowhere")

    def test_broken_post_processor_aborts_startup(self, make_context):
        with pytest.raises(DiscoveryError):
            make_context("ioc_fixtures.broken_processor")

    def test_lenient_scan(self, make_context):
        context = make_context("ioc_fixtures.import_error", strict_scan=False)

        assert context.get_bean_definition_names() == ["survivor"]

    def test_multiple_packages(self, make_context):
        context = make_context("ioc_fixtures.proxy", "ioc_fixtures.single_module")

        assert context.contains_bean("greeter")
        assert context.contains_bean("defaultNamed")
        # 后置处理器对其他包的Bean同样生效
        assert type(context.get_bean("defaultNamed")).__name__ == "DefaultNamed"

    def test_container_info(self, make_context):
        context = make_context("ioc_fixtures.basic")
        info = context.get_container_info()

        assert info["total_beans"] == 7
        assert info["singletons"] == 6
        assert info["post_processors"] == ["RecordingPostProcessor"]
        assert info["beans"]["task"] == {
            "class": "Task",
            "scope": "prototype",
            "dependencies": ["service_b", "service_a"],
            "initialized": False,
        }


class TestShutdown:
    """容器关闭测试"""

    def test_destroy_in_reverse_creation_order(self, make_context, caplog):
        """测试按创建的相反顺序销毁单例，销毁失败只记录日志"""
        context = make_context("ioc_fixtures.lifecycle")
        context.get_bean("session")

        with caplog.at_level(logging.ERROR, logger="minioc.context"):
            context.close()

        assert journal.entries == [("destroy", "repository"), ("destroy", "connection")]
        assert "Error destroying bean repository" in caplog.text
        assert context.closed

    def test_close_is_idempotent(self, make_context):
        context = make_context("ioc_fixtures.lifecycle")
        context.close()
        context.close()

        assert len(journal.entries) == 2

    def test_get_bean_after_close(self, make_context):
        context = make_context("ioc_fixtures.basic")
        context.close()

        with pytest.raises(ContainerError):
            context.get_bean("service_a")

    def test_context_manager(self):

        @component_scan("ioc_fixtures.lifecycle")
        class Config:
            pass

        with ApplicationContext(Config) as context:
            assert not context.closed

        assert context.closed
        assert ("destroy", "connection") in journal.entries


class SlowBean:
    """构造较慢的Bean，用于并发测试"""

    created = 0

    def __init__(self):
        time.sleep(0.05)
        SlowBean.created += 1


class TestConcurrency:
    """单例池并发测试"""

    def test_concurrent_lookup_creates_one_singleton(self, make_context):
        """测试多个线程同时获取未创建的单例，得到同一个实例"""
        context = make_context("ioc_fixtures.basic")
        context.registry.register(BeanDefinition("slow_bean", SlowBean))
        SlowBean.created = 0

        barrier = threading.Barrier(8)
        results = []

        def lookup():
            barrier.wait()
            results.append(context.get_bean("slow_bean"))

        threads = [threading.Thread(target=lookup) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert len(results) == 8
        assert all(bean is results[0] for bean in results)
        assert SlowBean.created == 1
        assert context.get_bean("slow_bean") is results[0]

    def test_first_pooled_instance_wins(self, make_context):
        context = make_context("ioc_fixtures.basic")
        original = context.get_bean("service_b")

        context._add_singleton("service_b", object())

        assert context.get_bean("service_b") is original
