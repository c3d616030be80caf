"""
IoC示例应用
IoC Demo Application

日期: 2026-10-18
描述: 演示组件扫描、字段注入、生命周期回调以及通过后置处理器替换代理对象
"""
