from .send_mail import SendMailInput, SendMailUseCase

__all__ = ["SendMailInput", "SendMailUseCase"]
