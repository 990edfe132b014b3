"""MAR 业务服务层：视图只做参数解析，规则全部在这里。"""
