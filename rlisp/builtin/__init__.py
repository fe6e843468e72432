from rlisp.builtin.env_builtin import register, define_intrinsic, define_special_form

__all__ = ["register", "define_intrinsic", "define_special_form"]
