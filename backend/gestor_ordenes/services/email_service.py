# backend/gestor_ordenes/services/email_service.py
"""
Servicio de Envío de Correo para la aplicación.

Este servicio se encarga de enviar correos electrónicos a los clientes,
especialmente para el envío de facturas. Utiliza la biblioteca FastMail
para el transporte SMTP y deja constancia de cada envío (éxito o error,
número de intentos) en la tabla email_logs.
"""

from html import escape
from typing import Any, Dict, Optional
import logging

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType
from sqlalchemy.ext.asyncio import AsyncSession

from gestor_ordenes.core.config import Settings
from gestor_ordenes.core.exceptions import EmailDeliveryError
from gestor_ordenes.crud import email_log_crud
from gestor_ordenes.db.models.email_log_model import EMAIL_STATUS_ERROR, EMAIL_STATUS_SUCCESS, EmailLog
from gestor_ordenes.db.models.invoice_model import Invoice
from gestor_ordenes.db.models.order_model import Order

logger = logging.getLogger(__name__)


def _money(value: float) -> str:
    return f"${value:,.2f}"


# --- Generación del HTML de la factura ---

def render_invoice_html(order_data: Dict[str, Any], invoice: Invoice) -> str:
    """Genera el contenido HTML de la factura a partir de los datos de la orden."""

    items_html = ""
    for item in order_data.get("items", []):
        line_total = item["price"] * item["quantity"]
        items_html += f"""
            <tr>
                <td>{escape(item['name'])}</td>
                <td class="quantity">{item['quantity']}</td>
                <td class="price">{_money(item['price'])}</td>
                <td class="price">{_money(line_total)}</td>
            </tr>
        """

    html_content = f"""
    <!DOCTYPE html>
    <html lang="es">
    <head>
        <meta charset="UTF-8">
        <title>Factura {escape(invoice.number)}</title>
        <style>
            body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 800px; margin: 0 auto; padding: 20px; }}
            .invoice-header {{ text-align: center; margin-bottom: 30px; padding: 20px; background-color: #f8f9fa; border-radius: 5px; }}
            .client-info {{ background-color: #f8f9fa; padding: 20px; border-radius: 5px; margin-bottom: 30px; }}
            .products-table {{ width: 100%; border-collapse: collapse; margin-bottom: 30px; }}
            .products-table th {{ background-color: #2c3e50; color: white; padding: 12px; text-align: left; }}
            .products-table td {{ padding: 12px; border-bottom: 1px solid #ddd; }}
            .total-section {{ text-align: right; padding: 20px; background-color: #f8f9fa; border-radius: 5px; }}
            .total-amount {{ font-size: 1.5em; color: #2c3e50; font-weight: bold; }}
            .footer {{ text-align: center; margin-top: 40px; padding-top: 20px; border-top: 1px solid #ddd; color: #7f8c8d; font-size: 0.9em; }}
            .price, .quantity {{ text-align: right !important; }}
        </style>
    </head>
    <body>
        <div class="invoice-header">
            <h1>FACTURA {escape(invoice.number)}</h1>
            <p>Orden #{order_data.get('id')} - Fecha: {invoice.date.strftime('%d/%m/%Y')}</p>
        </div>

        <div class="client-info">
            <h2>Datos del Cliente</h2>
            <p><strong>Nombre:</strong> {escape(order_data.get('client_name', ''))}</p>
            <p><strong>Email:</strong> {escape(order_data.get('client_email', ''))}</p>
            <p><strong>Teléfono:</strong> {escape(order_data.get('client_phone', ''))}</p>
        </div>

        <h2>Detalles de la Orden</h2>
        <table class="products-table">
            <thead>
                <tr>
                    <th>Producto</th>
                    <th class="quantity">Cantidad</th>
                    <th class="price">Precio Unitario</th>
                    <th class="price">Subtotal</th>
                </tr>
            </thead>
            <tbody>
                {items_html}
            </tbody>
        </table>

        <div class="total-section">
            <p>Subtotal: {_money(float(invoice.subtotal))}</p>
            <p>Impuesto: {_money(float(invoice.tax))}</p>
            <p class="total-amount">Total: {_money(float(invoice.total))}</p>
        </div>

        <div class="footer">
            <p>Gracias por su compra</p>
            <p>Este es un correo automático, por favor no responda a este mensaje</p>
        </div>
    </body>
    </html>
    """
    return html_content


# --- Servicio de Envío de Correo ---

class EmailService:
    """
    Envía correos HTML por SMTP y registra cada envío en email_logs.

    El cliente FastMail se crea al primer envío; sin configuración SMTP
    completa no se intenta la conexión y el envío queda registrado como error.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._mailer: Optional[FastMail] = None

    def is_configured(self) -> bool:
        return self.settings.smtp_configured

    def _get_mailer(self) -> FastMail:
        if self._mailer is None:
            conf = ConnectionConfig(
                MAIL_USERNAME=self.settings.SMTP_USER,
                MAIL_PASSWORD=self.settings.SMTP_PASSWORD,
                MAIL_FROM=self.settings.SENDER_EMAIL,
                MAIL_PORT=self.settings.SMTP_PORT,
                MAIL_SERVER=self.settings.SMTP_HOST,
                MAIL_STARTTLS=self.settings.SMTP_STARTTLS,
                MAIL_SSL_TLS=self.settings.SMTP_SSL_TLS,
                USE_CREDENTIALS=True,
                VALIDATE_CERTS=True,
            )
            self._mailer = FastMail(conf)
        return self._mailer

    async def _deliver(self, to: str, subject: str, html: str) -> None:
        message = MessageSchema(
            subject=subject,
            recipients=[to],
            body=html,
            subtype=MessageType.html,
        )
        await self._get_mailer().send_message(message)

    async def send_email(self, db: AsyncSession, to: str, subject: str, html: str) -> EmailLog:
        """
        Envía un correo con hasta EMAIL_MAX_ATTEMPTS intentos y registra el resultado.

        Raises:
            EmailDeliveryError: si el correo no pudo entregarse (el log ya está guardado).
        """
        if not self.is_configured():
            logger.warning("Configuración SMTP no encontrada. Saltando envío de correo a %s.", to)
            await email_log_crud.create_email_log(
                db, to=to, subject=subject, status=EMAIL_STATUS_ERROR,
                attempts=1, error="Configuración SMTP no encontrada",
            )
            raise EmailDeliveryError("Configuración SMTP no encontrada")

        max_attempts = max(1, self.settings.EMAIL_MAX_ATTEMPTS)
        last_error = None
        for attempt in range(1, max_attempts + 1):
            try:
                await self._deliver(to, subject, html)
            except Exception as e:
                last_error = e
                logger.error(f"Intento {attempt}/{max_attempts} fallido enviando correo a {to}: {e}")
                continue
            logger.info(f"Correo enviado exitosamente a {to}")
            return await email_log_crud.create_email_log(
                db, to=to, subject=subject, status=EMAIL_STATUS_SUCCESS, attempts=attempt,
            )

        await email_log_crud.create_email_log(
            db, to=to, subject=subject, status=EMAIL_STATUS_ERROR,
            attempts=max_attempts, error=str(last_error),
        )
        raise EmailDeliveryError(f"No se pudo enviar el correo a {to}: {last_error}")

    async def send_invoice(self, db: AsyncSession, order: Order, invoice: Invoice) -> EmailLog:
        """Envía la factura de una orden a su cliente. La orden debe tener cliente y líneas cargados."""
        if order.client is None:
            raise EmailDeliveryError(f"La orden {order.id} no tiene cliente al que enviar la factura")

        order_data = order.to_dict()
        logger.info(f"Preparando factura {invoice.number} para la orden {order.id} a {order.client.email}")
        subject = f"Factura {invoice.number} - Tu Compra"
        return await self.send_email(db, order.client.email, subject, render_invoice_html(order_data, invoice))
