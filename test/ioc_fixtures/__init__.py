"""测试用组件包，每个子包对应一个容器场景"""
