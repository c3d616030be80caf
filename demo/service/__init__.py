"""示例业务组件，由demo.app_config扫描"""
